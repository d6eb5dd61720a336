"""
Keyword classifiers for billing cycle, status and category.

Each classifier walks an ordered keyword table; the first row (in table
order, not match position) with a keyword in the text wins.
"""

import re
from typing import List, Optional, Tuple

from subreminder.models.subscription import BillingCycle, SubscriptionStatus

CYCLE_KEYWORDS: List[Tuple[List[str], BillingCycle]] = [
    (["weekly", "per week", "/wk", "/week", "every week", "每周"], BillingCycle.WEEKLY),
    (["monthly", "per month", "/mo", "/month", "every month", "each month", "每月", "月度", "包月"],
     BillingCycle.MONTHLY),
    (["quarterly", "every 3 months", "per quarter", "/qtr", "每季", "季度"], BillingCycle.QUARTERLY),
    (["yearly", "annual", "per year", "/yr", "/year", "annually", "every year", "年度", "包年", "每年"],
     BillingCycle.YEARLY),
    (["one-time", "one time", "lifetime", "once", "一次性", "终身", "买断"], BillingCycle.ONE_TIME),
]

STATUS_KEYWORDS: List[Tuple[List[str], SubscriptionStatus]] = [
    (["trial", "试用"], SubscriptionStatus.TRIAL),
    (["cancel", "已取消", "取消"], SubscriptionStatus.CANCELLED),
    (["pause", "暂停"], SubscriptionStatus.PAUSED),
]

CATEGORY_KEYWORDS: List[Tuple[List[str], str]] = [
    (["stream", "video", "movie", "film", "watch", "视频", "影视"], "Streaming"),
    (["music", "song", "audio", "podcast", "音乐", "歌曲"], "Music"),
    (["cloud", "storage", "backup", "云存储", "网盘", "云盘"], "Cloud Storage"),
    (["ai", "artificial intelligence", "machine learning", "人工智能"], "AI"),
    (["game", "gaming", "play", "游戏"], "Gaming"),
    (["fitness", "workout", "health", "gym", "exercise", "健身", "运动"], "Fitness"),
    (["news", "journal", "newspaper", "press", "新闻", "报纸"], "News"),
    (["learn", "course", "education", "study", "学习", "课程", "教育"], "Education"),
    (["invest", "stock", "trade", "bank", "finance", "投资", "理财", "金融"], "Finance"),
    (["design", "photo", "edit", "creative", "设计", "创意"], "Software"),
    (["vpn", "security", "privacy", "安全", "隐私"], "Software"),
    (["code", "develop", "programming", "git", "编程", "开发"], "Software"),
    (["project", "task", "team", "collaborate", "项目", "协作"], "Productivity"),
    (["membership", "donation", "patreon", "捐赠"], "Other"),
]


def _contains_keyword(lower_text: str, keyword: str) -> bool:
    # Two-letter ASCII keywords need word boundaries: "ai" must not match "paid".
    # Longer ones stay substrings so "github" still hits "git".
    if len(keyword) <= 2 and keyword.isascii() and keyword.isalpha():
        return re.search(rf'\b{re.escape(keyword)}\b', lower_text) is not None
    return keyword in lower_text


def classify_cycle(text: str) -> Optional[BillingCycle]:
    """Billing cycle named in the text, or None."""
    lower = text.lower()
    for keywords, cycle in CYCLE_KEYWORDS:
        if any(kw in lower for kw in keywords):
            return cycle
    return None


def classify_status(text: str) -> SubscriptionStatus:
    """Trial beats cancelled beats paused; anything else is active."""
    lower = text.lower()
    for keywords, status in STATUS_KEYWORDS:
        if any(kw in lower for kw in keywords):
            return status
    return SubscriptionStatus.ACTIVE


def infer_category(text: str) -> Optional[str]:
    """Category suggested by keywords, or None."""
    lower = text.lower()
    for keywords, category in CATEGORY_KEYWORDS:
        if any(_contains_keyword(lower, kw) for kw in keywords):
            return category
    return None
