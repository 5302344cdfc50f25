"""Tests for the statement text parser."""

from datetime import datetime

from moneyhelper.domain.statement_parser import (
    LOOKAHEAD_LINES,
    AmountPolicy,
    StatementTextParser,
    description_from_main_line,
    extract_external_id,
    find_category_label,
    is_block_start,
    merchant_name,
    split_blocks,
)
from moneyhelper.domain.vocabulary import NO_DESCRIPTION, OTHER

FIXED_NOW = datetime(2024, 2, 1, 12, 0)

GROCERY_LINE = "15.01.2024 14:30 123456 Супермаркеты 349,97 36 975,65"


class TestBlockScanning:
    """Tests for splitting statement lines into operation blocks."""

    def test_block_start_pattern(self):
        """Only lines starting with date and time open a block."""
        assert is_block_start(GROCERY_LINE)
        assert is_block_start("01.02.2024 00:00")
        assert not is_block_start("15.01.2024 MAGNIT MM")
        assert not is_block_start("Дата 15.01.2024 14:30")
        assert not is_block_start("")

    def test_lines_before_first_block_are_dropped(self):
        """Header lines do not belong to any block."""
        blocks = list(split_blocks(["Выписка", "Header", GROCERY_LINE, "MAGNIT"]))
        assert blocks == [[GROCERY_LINE, "MAGNIT"]]

    def test_window_is_bounded(self):
        """A block holds the start line plus at most four following lines."""
        lines = [GROCERY_LINE] + [f"line {i}" for i in range(1, 8)]
        blocks = list(split_blocks(lines))
        assert len(blocks) == 1
        assert len(blocks[0]) == LOOKAHEAD_LINES + 1
        assert blocks[0][-1] == "line 4"

    def test_next_start_line_closes_block(self):
        """Consecutive start lines produce separate, non-overlapping blocks."""
        second = "16.01.2024 10:00 654321 Транспорт 50,00 100,00"
        blocks = list(split_blocks([GROCERY_LINE, "MAGNIT", second, "METRO"]))
        assert blocks == [[GROCERY_LINE, "MAGNIT"], [second, "METRO"]]

    def test_lines_are_trimmed(self):
        """Surrounding whitespace is removed before matching."""
        blocks = list(split_blocks([f"   {GROCERY_LINE}  ", "  MAGNIT  "]))
        assert blocks == [[GROCERY_LINE, "MAGNIT"]]


class TestLineHelpers:
    """Tests for single-line extraction helpers."""

    def test_extract_external_id(self):
        """The authorization code follows the time."""
        assert extract_external_id(GROCERY_LINE) == "123456"

    def test_extract_external_id_missing(self):
        """Lines without a code yield None."""
        assert extract_external_id("15.01.2024 14:30 Супермаркеты 349,97") is None

    def test_extract_external_id_ignores_longer_numbers(self):
        """A longer digit run is not an authorization code."""
        assert extract_external_id("15.01.2024 14:30 1234567 Перевод 10,00") is None

    def test_find_category_label(self):
        """Bank category labels are found anywhere in a line."""
        assert find_category_label(GROCERY_LINE) == "Супермаркеты"
        assert find_category_label("15.01.2024 14:30 MAGNIT 10,00") is None

    def test_find_category_label_earlier_label_wins(self):
        """At one position the label listed first in the vocabulary wins."""
        line = "15.01.2024 14:30 123456 Перевод СБП 500,00 1 000,00"
        assert find_category_label(line) == "Перевод"

    def test_transfer_suffix_kept_as_description(self):
        """Text after the matched transfer label becomes the description."""
        line = "15.01.2024 14:30 123456 Перевод СБП 500,00 1 000,00"
        assert description_from_main_line(line, "Перевод") == "СБП"

    def test_description_from_main_line(self):
        """Date, code, label and amounts are stripped from the main line."""
        line = "19.01.2024 12:00 567890 Транспорт YANDEX GO 450,00 36 790,25"
        assert description_from_main_line(line, "Транспорт") == "YANDEX GO"

    def test_description_from_main_line_too_short(self):
        """Nothing meaningful left yields None."""
        assert description_from_main_line(GROCERY_LINE, "Супермаркеты") is None

    def test_merchant_name_cleanup(self):
        """Country codes, long numbers and amounts are removed."""
        assert merchant_name("PYATEROCHKA 14 MOSCOW RUS") == "PYATEROCHKA 14 MOSCOW"
        assert merchant_name("SHAURMA 12345678 150,00") == "SHAURMA"
        assert merchant_name("KOFEINYA USD") == "KOFEINYA"

    def test_merchant_name_keeps_text_after_date(self):
        """A date inside a continuation line is dropped, the text is kept."""
        assert merchant_name("23.01.2024 PEREKRESTOK") == "PEREKRESTOK"

    def test_merchant_name_rejects_numbers(self):
        """Lines with only numbers and punctuation are not merchants."""
        assert merchant_name("1 234,56 +") is None
        assert merchant_name("ABC") is None


class TestParseBlock:
    """Tests for turning one block into a transaction."""

    def test_grocery_line_reference_policy(self, parser):
        """The default policy takes the second amount of the line."""
        txn = parser.parse_block([GROCERY_LINE])

        assert txn is not None
        assert txn.amount == 36976
        assert txn.occurred_at == datetime(2024, 1, 15, 14, 30)
        assert txn.external_id == "123456"
        assert txn.category == "Продукты"
        assert txn.description == "Супермаркеты"
        assert txn.is_income is False

    def test_grocery_line_first_policy(self):
        """The FIRST policy takes the operation amount."""
        parser = StatementTextParser(amount_policy=AmountPolicy.FIRST)
        txn = parser.parse_block([GROCERY_LINE])
        assert txn.amount == 350

    def test_single_amount_used_by_both_policies(self):
        """A line with one amount uses it regardless of policy."""
        line = "20.01.2024 10:00 678901 Оплата по QR 99,50"
        for policy in AmountPolicy:
            txn = StatementTextParser(amount_policy=policy).parse_block([line])
            assert txn.amount == 100

    def test_amount_with_thousands_separator(self):
        """Space-grouped thousands collapse into one amount."""
        parser = StatementTextParser(amount_policy=AmountPolicy.FIRST)
        txn = parser.parse_block(["15.01.2024 14:30 123456 Транспорт 1 234,56 10 000,00"])
        assert txn.amount == 1235

    def test_block_without_amount_is_discarded(self, parser):
        """No amount means no transaction."""
        assert parser.parse_block(["21.01.2024 11:00 Выписка сформирована"]) is None

    def test_income_detected_by_plus(self, parser):
        """A plus sign marks an income and the amount keeps its magnitude."""
        txn = parser.parse_block(["16.01.2024 09:12 234567 Прочие операции +1 000,00"])
        assert txn.is_income is True
        assert txn.amount == 1000

    def test_invalid_date_falls_back_to_clock(self, parser):
        """An impossible date uses the injected clock."""
        txn = parser.parse_block(["31.02.2024 10:00 111111 Супермаркеты 100,00"])
        assert txn.occurred_at == FIXED_NOW

    def test_description_from_following_line(self, parser):
        """The merchant comes from a continuation line when the main line has none."""
        txn = parser.parse_block(["18.01.2024 08:05 456789 215,40", "PYATEROCHKA 14 MOSCOW RUS"])
        assert txn.description == "PYATEROCHKA 14 MOSCOW"
        assert txn.category == "Продукты"

    def test_card_operation_lines_are_skipped(self, parser):
        """Lines with the card operation marker never provide a description."""
        txn = parser.parse_block(
            [
                "18.01.2024 08:05 456789 215,40",
                "MAGNIT MM. Операция по карте ****1234",
                "SHAURMA CAFE",
            ]
        )
        assert txn.description == "SHAURMA CAFE"
        assert txn.category == "Кафе и рестораны"

    def test_vocabulary_category_not_overridden_by_merchant(self, parser):
        """A label on the main line wins over merchant keywords."""
        txn = parser.parse_block(["15.01.2024 14:30 123456 Транспорт 99,00", "MAGNIT"])
        assert txn.category == "Транспорт"
        assert txn.description == "MAGNIT"

    def test_fallbacks_without_label_or_description(self, parser):
        """Without label or merchant the category and description fall back."""
        txn = parser.parse_block(["22.01.2024 13:00 222222 300,00", "", "12345678"])
        assert txn.category == OTHER
        assert txn.description == NO_DESCRIPTION

    def test_unknown_merchant_is_other(self, parser):
        """A merchant without keywords is categorized as other."""
        txn = parser.parse_block(["22.01.2024 13:00 222222 300,00", "SOME SHOP"])
        assert txn.category == OTHER
        assert txn.description == "SOME SHOP"

    def test_sbp_transfer(self, parser):
        """An SBP transfer maps to transfers with the suffix as description."""
        txn = parser.parse_block(["15.01.2024 14:30 123456 Перевод СБП 500,00 1 000,00"])
        assert txn.category == "Переводы"
        assert txn.description == "СБП"


class TestParse:
    """Tests for parsing whole statements."""

    def test_parse_statement(self, parser, statement_text):
        """Only expenses are returned, in statement order."""
        transactions = parser.parse(statement_text)

        assert [t.occurred_at.day for t in transactions] == [15, 17, 18, 19, 20]
        assert [t.category for t in transactions] == [
            "Продукты",
            "Кафе и рестораны",
            "Продукты",
            "Транспорт",
            "Переводы",
        ]
        assert all(not t.is_income for t in transactions)
        assert all(t.category and t.description for t in transactions)

    def test_parse_statement_descriptions(self, parser, statement_text):
        """Descriptions come from main lines, continuation lines or labels."""
        descriptions = [t.description for t in parser.parse(statement_text)]
        assert descriptions == [
            "Супермаркеты",
            "Рестораны и кафе",
            "PYATEROCHKA 14 MOSCOW",
            "YANDEX GO",
            "IP IVANOV KOFEINYA",
        ]

    def test_parse_statement_first_amounts(self, statement_text):
        """With the FIRST policy the operation column is used."""
        parser = StatementTextParser(amount_policy=AmountPolicy.FIRST)
        assert [t.amount for t in parser.parse(statement_text)] == [350, 520, 215, 450, 100]

    def test_analyze_counts(self, parser, statement_text):
        """The summary reports expenses, incomes and discarded blocks."""
        summary = parser.analyze(statement_text)

        assert len(summary.expenses) == 5
        assert len(summary.incomes) == 1
        assert summary.incomes[0].amount == 37976
        assert summary.discarded_blocks == 1
        assert summary.total == 6

    def test_income_never_returned(self, parser):
        """A statement with only incomes yields nothing."""
        text = "16.01.2024 09:12 234567 Перевод с карты +5 000,00 10 000,00"
        assert parser.parse(text) == []

    def test_consecutive_operations(self, parser):
        """Back-to-back start lines each produce a transaction."""
        text = "\n".join(
            [
                "15.01.2024 14:30 123456 Супермаркеты 349,97",
                "15.01.2024 15:00 123457 Транспорт 60,00",
                "15.01.2024 16:00 123458 Рестораны и кафе 700,00",
            ]
        )
        transactions = parser.parse(text)
        assert [t.external_id for t in transactions] == ["123456", "123457", "123458"]
        assert [t.amount for t in transactions] == [350, 60, 700]

    def test_empty_text(self, parser):
        """Empty input parses to nothing."""
        assert parser.parse("") == []
        assert parser.analyze("").total == 0

    def test_parse_is_repeatable(self, parser, statement_text):
        """Parsing the same text twice gives identical results."""
        assert parser.parse(statement_text) == parser.parse(statement_text)

    def test_windows_line_endings(self, parser, statement_text):
        """Carriage returns do not affect parsing."""
        crlf = statement_text.replace("\n", "\r\n")
        assert parser.parse(crlf) == parser.parse(statement_text)
