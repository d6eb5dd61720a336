"""
Tests for the individual extractors: known services, amounts and classifiers.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from subreminder.models.known_services import KNOWN_SERVICES, find_known_service
from subreminder.models.subscription import CATEGORIES, BillingCycle, SubscriptionStatus
from subreminder.services.amounts import AmountExtractor, normalize_number
from subreminder.services.classifiers import classify_cycle, classify_status, infer_category
from subreminder.utils.candidates import create_amount_candidate
from subreminder.utils.scoring import rank_amounts, select_best_amount


class TestKnownServices:
    """Catalog lookup by name variants."""

    def test_catalog_is_complete(self):
        assert len(KNOWN_SERVICES) == 104
        assert all(s.category in CATEGORIES for s in KNOWN_SERVICES)

    def test_case_insensitive_match(self):
        service = find_known_service("Receipt from NETFLIX.COM")
        assert service.domain == "netflix.com"
        assert service.display_name == "Netflix"
        assert service.category == "Streaming"

    def test_longest_alias_wins(self):
        service = find_known_service("GitHub Copilot Individual")
        assert service.display_name == "GitHub Copilot"
        assert service.category == "AI"

    def test_specific_alias_beats_generic_name(self):
        """Text with both "YouTube" and "YouTube Premium" resolves to YouTube Premium."""
        service = find_known_service("YouTube\nYouTube Premium membership renewed")
        assert service.display_name == "YouTube Premium"
        assert service.domain == "youtube.com"

    def test_chinese_alias(self):
        service = find_known_service("爱奇艺 VIP会员")
        assert service.domain == "iqiyi.com"

    def test_no_match(self):
        assert find_known_service("Acme Weather Pro") is None


class TestAmountExtractor:
    """Amount + currency extraction and ranking."""

    def setup_method(self):
        self.extractor = AmountExtractor()

    def test_total_with_dollar(self):
        assert self.extractor.extract("Total: $9.99") == ("9.99", "USD")

    def test_yen_resolves_to_jpy_with_japan_context(self):
        assert self.extractor.extract("¥500 日本") == ("500", "JPY")

    def test_yen_defaults_to_cny(self):
        assert self.extractor.extract("支付金额：¥25.00") == ("25.00", "CNY")

    def test_kr_resolves_to_nok(self):
        text = "Spotify Norway\nkr 109,00"
        assert self.extractor.extract(text) == ("109.00", "NOK")

    def test_kr_resolves_to_dkk(self):
        assert self.extractor.extract("Dansk kvittering\nkr 79") == ("79", "DKK")

    def test_multi_char_symbol_beats_dollar(self):
        assert self.extractor.extract("Total HK$ 78.00") == ("78.00", "HKD")

    def test_us_dollar_prefix_is_not_singapore(self):
        assert self.extractor.extract("Price US$12.99") == ("12.99", "USD")

    def test_thousands_separator(self):
        assert self.extractor.extract("Total: $1,234.56") == ("1234.56", "USD")

    def test_keyword_line_beats_larger_amount(self):
        text = "Premium plan $29.99\nAmount charged today: $9.99"
        assert self.extractor.extract(text) == ("9.99", "USD")

    def test_larger_amount_wins_on_equal_priority(self):
        text = "Subtotal $8.00\nTax $0.99\nTotal $8.99"
        assert self.extractor.extract(text) == ("8.99", "USD")

    def test_trailing_currency_code(self):
        assert self.extractor.extract("Plan: 15.00 EUR per month") == ("15.00", "EUR")

    def test_bare_amount_needs_keyword(self):
        assert self.extractor.extract("Amount due 12,50") == ("12.50", None)
        assert self.extractor.extract("Order 12345 ref 9.99") == (None, None)

    def test_nothing_found(self):
        assert self.extractor.extract("") == (None, None)
        assert self.extractor.extract("no numbers here") == (None, None)

    def test_debug_lists_top_candidates(self):
        debug = {}
        self.extractor.extract("Total $5.00\n$1.00\n$2.00\n$3.00", _debug=debug)
        assert len(debug['amount_candidates']) == 3
        assert debug['amount_candidates'][0]['value'] == "5.00"

    def test_normalize_number(self):
        assert normalize_number("1,234.56") == "1234.56"
        assert normalize_number("9,99") == "9.99"


class TestAmountScoring:
    """Candidate priority and ranking."""

    def test_priority_bonuses(self):
        both = create_amount_candidate("1.00", "USD", "p", has_keyword=True, line_position=0)
        keyword_only = create_amount_candidate("1.00", None, "p", has_keyword=True, line_position=0)
        symbol_only = create_amount_candidate("1.00", "USD", "p", has_keyword=False, line_position=0)
        assert (both.priority, keyword_only.priority, symbol_only.priority) == (15, 10, 5)

    def test_stable_on_exact_ties(self):
        first = create_amount_candidate("5.00", "HKD", "a", has_keyword=False, line_position=0)
        second = create_amount_candidate("5.00", "USD", "b", has_keyword=False, line_position=0)
        assert select_best_amount([first, second]) is first
        assert rank_amounts([first, second]) == [first, second]

    def test_empty(self):
        assert select_best_amount([]) is None


class TestClassifiers:
    """Keyword tables for cycle, status and category."""

    def test_cycle(self):
        assert classify_cycle("Billed annually") == BillingCycle.YEARLY
        assert classify_cycle("$4.99/wk") == BillingCycle.WEEKLY
        assert classify_cycle("连续包月") == BillingCycle.MONTHLY
        assert classify_cycle("Billed every 3 months") == BillingCycle.QUARTERLY
        assert classify_cycle("Lifetime license") == BillingCycle.ONE_TIME
        assert classify_cycle("Thanks for your purchase") is None

    def test_cycle_table_order_wins(self):
        # Both "weekly" and "monthly" appear; weekly comes first in the table
        assert classify_cycle("monthly digest, weekly billing") == BillingCycle.WEEKLY

    def test_status_precedence(self):
        assert classify_status("Trial cancelled, plan paused") == SubscriptionStatus.TRIAL
        assert classify_status("Subscription cancelled") == SubscriptionStatus.CANCELLED
        assert classify_status("Membership paused") == SubscriptionStatus.PAUSED
        assert classify_status("订阅已取消") == SubscriptionStatus.CANCELLED
        assert classify_status("Payment received") == SubscriptionStatus.ACTIVE

    def test_category(self):
        assert infer_category("Watch movies anywhere") == "Streaming"
        assert infer_category("New AI assistant") == "AI"
        assert infer_category("Secure VPN access") == "Software"
        assert infer_category("云盘 会员") == "Cloud Storage"
        assert infer_category("Support us on Patreon") == "Other"

    def test_short_keywords_need_word_boundaries(self):
        assert infer_category("You paid 5 dollars") is None

    def test_three_letter_keywords_match_inside_words(self):
        assert infer_category("Receipt from GitHub") == "Software"
        assert infer_category("gitlab.com invoice") == "Software"
        assert infer_category("NordVPN annual plan") == "Software"
