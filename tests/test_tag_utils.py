from mdx_docs.parser.utils import extract_attr, find_closing_tag, has_flag


class TestFindClosingTag:
    def test_balances_nested_same_tag(self):
        text = "<Tabs><Tabs>x</Tabs></Tabs>rest"
        assert find_closing_tag(text, "Tabs") == text.rindex("</Tabs>")

    def test_inside_starts_one_level_deep(self):
        text = "inner <Tab>a</Tab> more</Tab> after"
        assert find_closing_tag(text, "Tab", inside=True) == text.index("</Tab> after")

    def test_body_beginning_with_nested_same_tag(self):
        text = "<Tab>a</Tab> b</Tab>after"
        assert find_closing_tag(text, "Tab", inside=True) == 14
        assert find_closing_tag(text, "Tab") == 6

    def test_inside_nested_self_closing_at_start(self):
        text = '<ResponseField name="b" /> y</ResponseField>'
        assert find_closing_tag(text, "ResponseField", inside=True) == text.index("</ResponseField>")

    def test_longer_tag_name_is_not_an_opening(self):
        text = '<Tab title="a"><Tabs>x</Tabs></Tab>'
        assert find_closing_tag(text, "Tab") == text.index("</Tab>")

    def test_unbalanced_returns_none(self):
        assert find_closing_tag("<Tip>no close", "Tip") is None
        assert find_closing_tag("<Tabs><Tabs></Tabs>", "Tabs") is None

    def test_nested_self_closing_does_not_open(self):
        text = '<ResponseField name="a">x <ResponseField name="b" /> y</ResponseField>'
        assert find_closing_tag(text, "ResponseField") == text.index("</ResponseField>")


class TestExtractAttr:
    def test_reads_double_quoted_value(self):
        source = ' title="Hello" icon="star"'
        assert extract_attr(source, "title") == "Hello"
        assert extract_attr(source, "icon") == "star"

    def test_missing_attribute(self):
        assert extract_attr(' title="Hello"', "href") is None

    def test_does_not_match_suffix_of_other_name(self):
        assert extract_attr(' data-title="x" title="y"', "title") == "y"
        assert extract_attr(' subtitle="x"', "title") is None

    def test_single_quotes_not_supported(self):
        assert extract_attr(" title='x'", "title") is None

    def test_empty_value(self):
        assert extract_attr(' title=""', "title") == ""


class TestHasFlag:
    def test_flag_present(self):
        assert has_flag(' path="id" type="string" required', "required")

    def test_flag_absent(self):
        assert not has_flag(' path="id" type="string"', "required")

    def test_substring_in_value_counts(self):
        assert has_flag(' path="id" description="not required"', "required")
