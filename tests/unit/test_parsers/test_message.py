"""Tests for the free-text bank alert parser."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from samvid.core.vocabulary import Vocabulary
from samvid.parsers.message import MessageParser, extract_transaction
from samvid.schemas.transaction import NoMatch, NoMatchReason, Transaction, TransactionStatus


class TestSpamFilter:
    """OTP / login messages are never transactions."""

    def test_otp_login_message(self):
        result = extract_transaction("Dear Customer, OTP for login is 4521")

        assert isinstance(result, NoMatch)
        assert result.reason == NoMatchReason.SPAM_FILTERED
        assert not result

    @pytest.mark.parametrize(
        "text",
        [
            "Your OTP for txn of Rs 5,000.00 at Amazon is 884512",
            "Use verification code 1234 to confirm payment of INR 200",
            "Login alert: Rs.1 debited for auth check",
            "123456 is your one time password for Rs 999 purchase",
        ],
    )
    def test_spam_wins_over_embedded_amount(self, text):
        result = extract_transaction(text)

        assert isinstance(result, NoMatch)
        assert result.reason == NoMatchReason.SPAM_FILTERED
        assert result.error_code == "EXTRACT_001"

    @pytest.mark.parametrize(
        "text",
        [
            "Use 482913 to authenticate your payment of Rs 2,000 at Amazon",
            "Never share OTPs. 482913 authorizes Rs 2,000 at Amazon",
            "Your logins are locked. Rs 0 charged at Netbanking",
            "Promo codes inside: Rs 100 off at Myntra",
        ],
    )
    def test_keyword_prefixes_are_spam(self, text):
        result = extract_transaction(text)

        assert isinstance(result, NoMatch)
        assert result.reason == NoMatchReason.SPAM_FILTERED

    def test_keyword_inside_word_is_not_spam(self):
        parser = MessageParser()

        assert not parser.is_spam("INR 450 spent at Barcode Cafe")
        assert parser.is_spam("Transaction authorised for Rs 250 at Dominos")


class TestAmountExtraction:
    """Currency-prefixed amounts."""

    def test_no_amount_is_no_match(self):
        result = extract_transaction("Your account statement is ready to view")

        assert isinstance(result, NoMatch)
        assert result.reason == NoMatchReason.NO_AMOUNT
        assert result.error_code == "EXTRACT_002"
        assert result.user_message == "Could not detect a valid transaction."

    def test_bare_number_without_currency_is_no_match(self):
        result = extract_transaction("500 debited at Starbucks")

        assert isinstance(result, NoMatch)
        assert result.reason == NoMatchReason.NO_AMOUNT

    def test_empty_text_is_no_match(self):
        assert isinstance(extract_transaction(""), NoMatch)

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("INR 500 spent", Decimal("500")),
            ("Rs.1200 spent", Decimal("1200")),
            ("Rs 1,23,456.50 spent", Decimal("123456.50")),
            ("₹99.9 spent", Decimal("99.9")),
            ("inr2,499.00 spent", Decimal("2499.00")),
            ("Rs. 75 spent", Decimal("75")),
        ],
    )
    def test_find_amount(self, text, expected):
        assert MessageParser().find_amount(text) == expected

    def test_currency_marker_inside_word_ignored(self):
        assert MessageParser().find_amount("Open 24 hours 7 days") is None


class TestDirection:
    """Credit vocabulary flags incoming money."""

    @pytest.mark.parametrize("word", ["credited", "received", "deposited", "added"])
    def test_credit_words(self, word):
        assert MessageParser().is_credit(f"Rs 100 {word} to your wallet")

    def test_debit_default(self):
        assert not MessageParser().is_credit("Rs 100 debited from your account")


class TestVendorExtraction:
    """Reference prefix first, then preposition pattern, else Unknown."""

    def test_reference_prefix_preferred(self):
        parser = MessageParser()

        vendor = parser.find_vendor("Rs 300 debited from A/c XX12 to UPI-SWIGGY")
        assert vendor.strip() == "SWIGGY"

    def test_preposition_stops_at_on(self):
        parser = MessageParser()

        assert parser.find_vendor("INR 500 spent at Starbucks on 12-01") == "Starbucks"

    def test_preposition_stops_at_ref(self):
        parser = MessageParser()

        assert parser.find_vendor("Rs 150 paid to Ramu Tea Stall Ref 88123") == "Ramu Tea Stall"

    def test_preposition_stops_at_parenthesis(self):
        parser = MessageParser()

        assert parser.find_vendor("Rs 80 spent at Chai Point (Koramangala)") == "Chai Point"

    def test_no_vendor_is_unknown(self):
        assert MessageParser().find_vendor("Rs 80 debited") == "Unknown"


class TestParse:
    """End-to-end message parsing."""

    def test_starbucks_debit(self, fixed_now):
        result = extract_transaction("Acct debited INR 500 at Starbucks on 12-01", now=fixed_now)

        assert isinstance(result, Transaction)
        assert "STARBUCKS" in result.vendor
        assert result.amount == Decimal("500")
        assert result.category == "Food"
        assert result.status == TransactionStatus.VERIFIED

    def test_neft_credit_is_income(self, fixed_now):
        result = extract_transaction("Rs.1200 credited to your account via NEFT", now=fixed_now)

        assert isinstance(result, Transaction)
        assert result.amount == Decimal("1200")
        assert result.category == "Income"
        assert result.status == TransactionStatus.VERIFIED

    def test_date_is_ingestion_date_not_message_date(self, fixed_now):
        result = extract_transaction("INR 500 spent at Starbucks on 03-03-2024", now=fixed_now)

        assert result.date == date(2025, 1, 15)

    def test_id_has_prefix_and_time(self, fixed_now):
        result = extract_transaction("INR 500 spent at Starbucks", now=fixed_now)

        millis = int(fixed_now.timestamp() * 1000)
        assert result.id.startswith(f"sms-{millis}-")

    def test_ids_unique_for_same_instant(self, fixed_now):
        first = extract_transaction("INR 500 spent at Starbucks", now=fixed_now)
        second = extract_transaction("INR 500 spent at Starbucks", now=fixed_now)

        assert first.id != second.id

    def test_vendor_is_cleaned_and_uppercased(self, fixed_now):
        result = extract_transaction(
            "Rs 2,499.00 spent on card XX4321 at Amazon Pvt Ltd on 14-01", now=fixed_now
        )

        assert result.vendor == "AMAZON"
        assert result.category == "Shopping"

    def test_upi_vendor(self, fixed_now):
        result = extract_transaction(
            "Rs 349 debited from A/c XX9876 for UPI-ZOMATO LTD", now=fixed_now
        )

        assert result.vendor == "ZOMATO"
        assert result.category == "Food"

    def test_stub_vendor_debit_sentinel(self, fixed_now):
        result = extract_transaction("Rs 500 sent via UPI", now=fixed_now)

        assert result.vendor == "TRANSFER TO ACCOUNT"
        assert result.category == "Transfer"

    def test_numeric_vendor_credit_sentinel(self, fixed_now):
        result = extract_transaction("Rs 500 received from 9876543210", now=fixed_now)

        assert result.vendor == "INCOMING TRANSFER"
        assert result.category == "Income"

    def test_unknown_vendor_debit_sentinel(self, fixed_now):
        result = extract_transaction("INR 20 debited", now=fixed_now)

        assert result.vendor == "TRANSFER TO ACCOUNT"

    def test_large_unknown_spend_is_major_expense(self, fixed_now):
        result = extract_transaction("INR 45,000 spent at Kumar Furnishings", now=fixed_now)

        assert result.vendor == "KUMAR FURNISHINGS"
        assert result.category == "Major Expense"

    def test_deterministic_for_fixed_now(self, fixed_now):
        text = "Acct debited INR 500 at Starbucks on 12-01"
        first = extract_transaction(text, now=fixed_now)
        second = extract_transaction(text, now=fixed_now)

        assert first.model_dump(exclude={"id"}) == second.model_dump(exclude={"id"})

    def test_default_now_uses_today(self):
        result = extract_transaction("INR 500 spent at Starbucks")

        assert result.date == datetime.now().date()

    def test_custom_vocabulary(self, fixed_now):
        vocab = Vocabulary(currency_markers=("USD",), spam_keywords=("pin",))

        result = extract_transaction("USD 12.50 spent at Starbucks", now=fixed_now, vocabulary=vocab)
        assert isinstance(result, Transaction)
        assert result.amount == Decimal("12.50")

        assert isinstance(
            extract_transaction("INR 500 spent at Starbucks", vocabulary=vocab), NoMatch
        )
        assert isinstance(
            extract_transaction("Your PIN for USD 5 is 1234", vocabulary=vocab), NoMatch
        )
