"""Tests for the bilingual keyword table."""

import pytest


class TestKeywordTable:
    """Test the static KEYWORDS table."""

    def test_every_dimension_has_an_entry(self):
        """KEYWORDS should have one key per Dimension."""
        from claw_router.router.keywords import KEYWORDS
        from claw_router.router.types import Dimension

        assert set(KEYWORDS) == set(Dimension)

    def test_message_length_has_no_keywords(self):
        """messageLength is scored numerically, not by keywords."""
        from claw_router.router.keywords import KEYWORDS
        from claw_router.router.types import Dimension

        assert KEYWORDS[Dimension.MESSAGE_LENGTH] == ()

    def test_weights_in_range(self):
        """Every keyword weight should lie in (0, 1]."""
        from claw_router.router.keywords import KEYWORDS

        for entries in KEYWORDS.values():
            for entry in entries:
                assert 0 < entry.weight <= 1, entry

    def test_table_is_read_only(self):
        """KEYWORDS should reject mutation."""
        from claw_router.router.keywords import KEYWORDS
        from claw_router.router.types import Dimension

        with pytest.raises(TypeError):
            KEYWORDS[Dimension.REASONING] = ()

    def test_table_is_bilingual(self):
        """Keyword dimensions should carry both Chinese and English entries."""
        from claw_router.router.keywords import KEYWORDS
        from claw_router.router.types import Dimension

        def has_cjk(text):
            return any("一" <= ch <= "鿿" for ch in text)

        for dimension, entries in KEYWORDS.items():
            if dimension == Dimension.MESSAGE_LENGTH:
                continue
            patterns = [e.pattern for e in entries]
            assert any(has_cjk(p) for p in patterns), dimension
            assert any(p.isascii() for p in patterns), dimension


class TestValidateKeywordTable:
    """Test validate_keyword_table()."""

    def _table_with(self, dimension_entries):
        from claw_router.router.types import Dimension

        table = {d: () for d in Dimension}
        table.update(dimension_entries)
        return table

    def test_valid_table_compiles(self):
        """A valid table should compile to (weight, matcher) pairs."""
        from claw_router.router.keywords import validate_keyword_table
        from claw_router.router.types import Dimension, KeywordEntry

        compiled = validate_keyword_table(
            self._table_with({
                Dimension.REASONING: (
                    KeywordEntry("Why", 0.4),
                    KeywordEntry(r"\bstep\s*\d", 0.6, is_regex=True),
                ),
            })
        )

        (w1, plain), (w2, regex) = compiled[Dimension.REASONING]
        assert (w1, w2) == (0.4, 0.6)
        assert plain("so why not")
        assert not plain("nothing here")
        assert regex("do step 2 now")

    def test_literal_chain_matches_within_one_line(self):
        """A '先.*再.*然后' entry needs all three parts, in order, on one line."""
        from claw_router.router.keywords import validate_keyword_table
        from claw_router.router.types import Dimension, KeywordEntry

        compiled = validate_keyword_table(
            self._table_with({Dimension.TASK_STEPS: (KeywordEntry("先.*再.*然后", 0.65, True),)})
        )

        ((weight, matcher),) = compiled[Dimension.TASK_STEPS]
        assert weight == 0.65
        assert matcher("先装依赖再建库然后部署")
        assert not matcher("先装依赖\n再建库然后部署")
        assert not matcher("然后先再")
        assert not matcher("先再" * 5000)

    def test_word_boundary_ignores_cjk(self):
        """Latin tokens glued to Chinese text still hit boundary-anchored entries."""
        from claw_router.router.keywords import validate_keyword_table
        from claw_router.router.types import Dimension, KeywordEntry

        compiled = validate_keyword_table(
            self._table_with({Dimension.CODE_TECH: (KeywordEntry(r"\bfn\b", 0.4, True),)})
        )

        ((_, matcher),) = compiled[Dimension.CODE_TECH]
        assert matcher("用fn写一个函数")
        assert not matcher("fnord")

    def test_numbered_entries_are_literal_backslash(self):
        """The '1\\.' / '2\\.' entries match only the escaped text, not prose numbers."""
        from claw_router.router.keywords import COMPILED_KEYWORDS
        from claw_router.router.scorer import score_keywords
        from claw_router.router.types import Dimension

        entries = COMPILED_KEYWORDS[Dimension.TASK_STEPS]

        assert score_keywords("see chapter 1. intro", entries) == 0.0
        assert score_keywords("1\\.", entries) == pytest.approx(0.35)

    def test_bad_regex_rejected(self):
        """An invalid regex should raise KeywordTableError."""
        from claw_router.router.keywords import KeywordTableError, validate_keyword_table
        from claw_router.router.types import Dimension, KeywordEntry

        table = self._table_with({Dimension.CODE_TECH: (KeywordEntry("(unclosed", 0.5, True),)})

        with pytest.raises(KeywordTableError, match="invalid regex"):
            validate_keyword_table(table)

    @pytest.mark.parametrize("weight", [0.0, -0.1, 1.5])
    def test_weight_out_of_range_rejected(self, weight):
        """Weights outside (0, 1] should raise KeywordTableError."""
        from claw_router.router.keywords import KeywordTableError, validate_keyword_table
        from claw_router.router.types import Dimension, KeywordEntry

        table = self._table_with({Dimension.CREATIVITY: (KeywordEntry("poem", weight),)})

        with pytest.raises(KeywordTableError, match="must be in"):
            validate_keyword_table(table)

    def test_missing_dimension_rejected(self):
        """A table missing a dimension should raise KeywordTableError."""
        from claw_router.router.keywords import KeywordTableError, validate_keyword_table
        from claw_router.router.types import Dimension

        table = self._table_with({})
        del table[Dimension.OUTPUT_COMPLEX]

        with pytest.raises(KeywordTableError, match="outputComplex"):
            validate_keyword_table(table)

    def test_keyword_table_error_is_value_error(self):
        """KeywordTableError should be a ValueError."""
        from claw_router.router.keywords import KeywordTableError

        assert issubclass(KeywordTableError, ValueError)
