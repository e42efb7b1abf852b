from prospect_intel.enrichment.matching import KeywordMatcher


class TestKeywordMatcher:
    def test_prepare_folds_accents_and_case(self) -> None:
        matcher = KeywordMatcher()
        assert matcher.prepare("Naghahanap ng SUPPLIER sa Parañaque") == (
            "naghahanap ng supplier sa paranaque"
        )

    def test_matches_on_word_boundaries(self) -> None:
        matcher = KeywordMatcher()
        prepared = matcher.prepare("Supplier in Parañaque")
        assert matcher.find(prepared, ("sup", "supplier", "paranaque")) == ["supplier", "paranaque"]

    def test_hyphen_is_part_of_word(self) -> None:
        matcher = KeywordMatcher()
        prepared = matcher.prepare("Salamat sa ka-team ko")
        assert matcher.find(prepared, ("team", "ka-team")) == ["ka-team"]

    def test_multi_word_phrase(self) -> None:
        matcher = KeywordMatcher()
        prepared = matcher.prepare("We are LOOKING FOR a partner")
        assert matcher.find(prepared, ("looking for",)) == ["looking for"]

    def test_count_is_distinct_keywords(self) -> None:
        matcher = KeywordMatcher()
        prepared = matcher.prepare("budget budget budget and pricing")
        assert matcher.count(prepared, ("budget", "pricing", "budget")) == 2
