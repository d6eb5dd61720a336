"""
Catalog of well-known subscription services for OCR text matching.

Each entry lists name variants (matched case-insensitively, including
Chinese names for Chinese services), a primary domain, a category from
CATEGORIES and the cycle the service usually bills on.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from subreminder.models.subscription import BillingCycle

MONTHLY = BillingCycle.MONTHLY
YEARLY = BillingCycle.YEARLY
ONE_TIME = BillingCycle.ONE_TIME


@dataclass(frozen=True)
class KnownService:
    names: Tuple[str, ...]
    domain: str
    category: str
    default_cycle: BillingCycle

    @property
    def display_name(self) -> str:
        return self.names[0]


KNOWN_SERVICES: Tuple[KnownService, ...] = (
    # Streaming
    KnownService(("Netflix", "NETFLIX"), "netflix.com", "Streaming", MONTHLY),
    KnownService(("Disney+", "Disney Plus", "DISNEY+"), "disneyplus.com", "Streaming", MONTHLY),
    KnownService(("Hulu", "HULU"), "hulu.com", "Streaming", MONTHLY),
    KnownService(("HBO Max", "HBO", "Max"), "max.com", "Streaming", MONTHLY),
    KnownService(("Amazon Prime", "Prime Video", "Amazon Prime Video"), "amazon.com", "Streaming", YEARLY),
    KnownService(("Apple TV+", "Apple TV Plus"), "tv.apple.com", "Streaming", MONTHLY),
    KnownService(("Paramount+", "Paramount Plus"), "paramountplus.com", "Streaming", MONTHLY),
    KnownService(("Peacock", "Peacock Premium"), "peacocktv.com", "Streaming", MONTHLY),
    KnownService(("Crunchyroll", "CRUNCHYROLL"), "crunchyroll.com", "Streaming", MONTHLY),
    KnownService(("YouTube Premium", "YouTube Music", "YouTube TV"), "youtube.com", "Streaming", MONTHLY),
    KnownService(("Twitch", "Twitch Turbo"), "twitch.tv", "Streaming", MONTHLY),

    # Chinese Streaming
    KnownService(("爱奇艺", "iQIYI", "iQiyi", "IQIYI"), "iqiyi.com", "Streaming", MONTHLY),
    KnownService(("腾讯视频", "Tencent Video"), "v.qq.com", "Streaming", MONTHLY),
    KnownService(("优酷", "Youku", "YOUKU"), "youku.com", "Streaming", MONTHLY),
    KnownService(("芒果TV", "MangoTV"), "mgtv.com", "Streaming", MONTHLY),
    KnownService(("哔哩哔哩", "bilibili", "B站", "Bilibili"), "bilibili.com", "Streaming", MONTHLY),

    # Music
    KnownService(("Spotify", "SPOTIFY", "Spotify Premium"), "spotify.com", "Music", MONTHLY),
    KnownService(("Apple Music",), "music.apple.com", "Music", MONTHLY),
    KnownService(("Tidal", "TIDAL"), "tidal.com", "Music", MONTHLY),
    KnownService(("Deezer", "DEEZER"), "deezer.com", "Music", MONTHLY),
    KnownService(("网易云音乐", "NetEase Music", "NetEase Cloud Music"), "music.163.com", "Music", MONTHLY),
    KnownService(("QQ音乐", "QQ Music"), "y.qq.com", "Music", MONTHLY),
    KnownService(("SoundCloud", "SoundCloud Go"), "soundcloud.com", "Music", MONTHLY),

    # AI
    KnownService(("ChatGPT", "ChatGPT Plus", "OpenAI"), "openai.com", "AI", MONTHLY),
    KnownService(("Claude", "Claude Pro", "Anthropic"), "anthropic.com", "AI", MONTHLY),
    KnownService(("Midjourney", "MidJourney", "MIDJOURNEY"), "midjourney.com", "AI", MONTHLY),
    KnownService(("GitHub Copilot", "Copilot"), "github.com", "AI", MONTHLY),
    KnownService(("Cursor", "Cursor Pro"), "cursor.com", "AI", MONTHLY),
    KnownService(("Perplexity", "Perplexity Pro"), "perplexity.ai", "AI", MONTHLY),
    KnownService(("Gemini", "Google Gemini", "Gemini Advanced"), "gemini.google.com", "AI", MONTHLY),
    KnownService(("Poe", "Poe Premium"), "poe.com", "AI", MONTHLY),

    # Software
    KnownService(("Adobe", "Adobe Creative Cloud", "Creative Cloud", "Photoshop", "Lightroom", "Illustrator", "Premiere Pro"), "adobe.com", "Software", MONTHLY),
    KnownService(("Microsoft 365", "Office 365", "Microsoft Office"), "microsoft.com", "Software", YEARLY),
    KnownService(("JetBrains", "IntelliJ", "WebStorm", "PyCharm", "PhpStorm"), "jetbrains.com", "Software", YEARLY),
    KnownService(("1Password", "1password"), "1password.com", "Software", YEARLY),
    KnownService(("LastPass", "Lastpass"), "lastpass.com", "Software", YEARLY),
    KnownService(("Dashlane",), "dashlane.com", "Software", YEARLY),
    KnownService(("Setapp", "SETAPP"), "setapp.com", "Software", MONTHLY),
    KnownService(("CleanMyMac", "CleanMyMac X"), "macpaw.com", "Software", YEARLY),

    # Cloud Storage
    KnownService(("iCloud", "iCloud+", "Apple iCloud"), "icloud.com", "Cloud Storage", MONTHLY),
    KnownService(("Google One", "Google Drive", "Google Storage"), "one.google.com", "Cloud Storage", MONTHLY),
    KnownService(("Dropbox", "Dropbox Plus", "Dropbox Professional"), "dropbox.com", "Cloud Storage", MONTHLY),
    KnownService(("OneDrive", "Microsoft OneDrive"), "onedrive.com", "Cloud Storage", MONTHLY),
    KnownService(("Box", "Box.com"), "box.com", "Cloud Storage", MONTHLY),
    KnownService(("百度网盘", "Baidu Pan", "百度云"), "pan.baidu.com", "Cloud Storage", MONTHLY),

    # Productivity
    KnownService(("Notion", "NOTION", "Notion Plus", "Notion AI"), "notion.so", "Productivity", MONTHLY),
    KnownService(("Figma", "FIGMA", "Figma Professional"), "figma.com", "Productivity", MONTHLY),
    KnownService(("Slack", "SLACK", "Slack Pro"), "slack.com", "Productivity", MONTHLY),
    KnownService(("Linear", "LINEAR"), "linear.app", "Productivity", MONTHLY),
    KnownService(("Todoist", "Todoist Pro"), "todoist.com", "Productivity", YEARLY),
    KnownService(("Trello", "Trello Premium"), "trello.com", "Productivity", MONTHLY),
    KnownService(("Asana", "Asana Premium"), "asana.com", "Productivity", MONTHLY),
    KnownService(("Monday.com", "Monday"), "monday.com", "Productivity", MONTHLY),
    KnownService(("Canva", "Canva Pro"), "canva.com", "Productivity", MONTHLY),
    KnownService(("Miro", "Miro Board"), "miro.com", "Productivity", MONTHLY),
    KnownService(("Evernote", "Evernote Premium"), "evernote.com", "Productivity", YEARLY),
    KnownService(("Bear", "Bear Pro"), "bear.app", "Productivity", YEARLY),
    KnownService(("Craft", "Craft Pro"), "craft.do", "Productivity", YEARLY),

    # Education
    KnownService(("Coursera", "Coursera Plus"), "coursera.org", "Education", MONTHLY),
    KnownService(("Udemy",), "udemy.com", "Education", ONE_TIME),
    KnownService(("Skillshare", "Skillshare Premium"), "skillshare.com", "Education", YEARLY),
    KnownService(("MasterClass", "Masterclass"), "masterclass.com", "Education", YEARLY),
    KnownService(("Duolingo", "Duolingo Plus", "Duolingo Super"), "duolingo.com", "Education", MONTHLY),
    KnownService(("Brilliant", "Brilliant Premium"), "brilliant.org", "Education", YEARLY),

    # News
    KnownService(("The New York Times", "NYT", "NY Times", "New York Times"), "nytimes.com", "News", MONTHLY),
    KnownService(("The Washington Post", "Washington Post"), "washingtonpost.com", "News", MONTHLY),
    KnownService(("The Wall Street Journal", "WSJ", "Wall Street Journal"), "wsj.com", "News", MONTHLY),
    KnownService(("The Economist", "Economist"), "economist.com", "News", MONTHLY),
    KnownService(("Medium", "Medium Premium"), "medium.com", "News", MONTHLY),
    KnownService(("Substack",), "substack.com", "News", MONTHLY),

    # Gaming
    KnownService(("Xbox Game Pass", "Game Pass", "Xbox Live", "Xbox Gold"), "xbox.com", "Gaming", MONTHLY),
    KnownService(("PlayStation Plus", "PS Plus", "PS+", "PlayStation Now"), "playstation.com", "Gaming", MONTHLY),
    KnownService(("Nintendo Switch Online", "Nintendo Online"), "nintendo.com", "Gaming", YEARLY),
    KnownService(("Apple Arcade",), "apple.com/apple-arcade", "Gaming", MONTHLY),
    KnownService(("EA Play", "EA Access"), "ea.com", "Gaming", MONTHLY),
    KnownService(("Steam",), "store.steampowered.com", "Gaming", ONE_TIME),

    # Fitness
    KnownService(("Apple Fitness+", "Apple Fitness Plus", "Fitness+"), "apple.com/apple-fitness-plus", "Fitness", MONTHLY),
    KnownService(("Peloton", "Peloton Digital"), "onepeloton.com", "Fitness", MONTHLY),
    KnownService(("Strava", "Strava Premium"), "strava.com", "Fitness", MONTHLY),
    KnownService(("MyFitnessPal", "MyFitnessPal Premium"), "myfitnesspal.com", "Fitness", MONTHLY),
    KnownService(("Headspace", "Headspace Plus"), "headspace.com", "Fitness", YEARLY),
    KnownService(("Calm", "Calm Premium"), "calm.com", "Fitness", YEARLY),
    KnownService(("Keep", "Keep Premium"), "keep.com", "Fitness", MONTHLY),

    # Finance
    KnownService(("Robinhood", "Robinhood Gold"), "robinhood.com", "Finance", MONTHLY),
    KnownService(("Revolut", "Revolut Premium", "Revolut Metal"), "revolut.com", "Finance", MONTHLY),
    KnownService(("YNAB", "You Need A Budget"), "ynab.com", "Finance", YEARLY),
    KnownService(("Mint", "Mint Premium"), "mint.com", "Finance", MONTHLY),

    # VPN & Security
    KnownService(("NordVPN", "Nord VPN"), "nordvpn.com", "Software", YEARLY),
    KnownService(("ExpressVPN", "Express VPN"), "expressvpn.com", "Software", YEARLY),
    KnownService(("Surfshark", "SurfShark"), "surfshark.com", "Software", YEARLY),

    # Developer / Cloud
    KnownService(("GitHub", "GitHub Pro", "GitHub Team"), "github.com", "Software", MONTHLY),
    KnownService(("GitLab", "GitLab Premium"), "gitlab.com", "Software", MONTHLY),
    KnownService(("Vercel", "Vercel Pro"), "vercel.com", "Software", MONTHLY),
    KnownService(("Netlify", "Netlify Pro"), "netlify.com", "Software", MONTHLY),
    KnownService(("AWS", "Amazon Web Services"), "aws.amazon.com", "Software", MONTHLY),
    KnownService(("Heroku", "Heroku Pro"), "heroku.com", "Software", MONTHLY),
    KnownService(("DigitalOcean", "Digital Ocean"), "digitalocean.com", "Software", MONTHLY),
    KnownService(("Cloudflare", "Cloudflare Pro"), "cloudflare.com", "Software", MONTHLY),

    # Design
    KnownService(("Sketch", "Sketch Pro"), "sketch.com", "Productivity", YEARLY),
    KnownService(("Framer", "Framer Pro"), "framer.com", "Productivity", MONTHLY),
    KnownService(("InVision", "Invision"), "invisionapp.com", "Productivity", MONTHLY),

    # Communication
    KnownService(("Zoom", "Zoom Pro", "Zoom Workplace"), "zoom.us", "Productivity", MONTHLY),
    KnownService(("Discord", "Discord Nitro", "Nitro"), "discord.com", "Software", MONTHLY),
    KnownService(("Telegram", "Telegram Premium"), "telegram.org", "Software", MONTHLY),
)


def find_known_service(text: str) -> Optional[KnownService]:
    """
    Find the known service whose longest name variant appears in the text.

    Longer variants win ("YouTube Premium" over "YouTube"); on equal
    length the service registered first wins.
    """
    lower_text = text.lower()
    best_match = None
    best_length = 0

    for service in KNOWN_SERVICES:
        for name in service.names:
            if len(name) > best_length and name.lower() in lower_text:
                best_match = service
                best_length = len(name)

    return best_match
