import logging

from mdx_docs.parser.base import DocFrontmatter
from mdx_docs.parser.frontmatter import extract_frontmatter


class TestExtractFrontmatter:
    def test_parses_known_fields(self):
        text = "---\ntitle: Hello\ndescription: World\nsidebarTitle: Hi\nicon: star\n---\n\n# Body"
        fm, rest = extract_frontmatter(text)
        assert fm.title == "Hello"
        assert fm.description == "World"
        assert fm.sidebar_title == "Hi"
        assert fm.icon == "star"
        assert rest == "# Body"

    def test_no_frontmatter_returns_text_unchanged(self):
        text = "# Just markdown\n\nNo metadata."
        fm, rest = extract_frontmatter(text)
        assert fm == DocFrontmatter()
        assert rest == text

    def test_unclosed_block_returns_original(self):
        text = "---\ntitle: Missing close\n\nBody"
        fm, rest = extract_frontmatter(text)
        assert fm.title == ""
        assert rest == text

    def test_empty_block_yields_defaults(self):
        fm, rest = extract_frontmatter("---\n---\nBody")
        assert fm == DocFrontmatter()
        assert rest == "Body"

    def test_unknown_keys_are_ignored(self):
        fm, rest = extract_frontmatter("---\ntitle: T\nmode: wide\n---\nx")
        assert fm.title == "T"
        assert rest == "x"

    def test_malformed_yaml_logs_and_keeps_text(self, caplog):
        text = "---\ntitle: [unclosed\n---\nBody"
        with caplog.at_level(logging.WARNING):
            fm, rest = extract_frontmatter(text)
        assert fm == DocFrontmatter()
        assert rest == text
        assert "frontmatter" in caplog.text

    def test_non_mapping_yaml_keeps_text(self):
        text = "---\n- a\n- b\n---\nBody"
        fm, rest = extract_frontmatter(text)
        assert fm == DocFrontmatter()
        assert rest == text

    def test_leading_whitespace_before_delimiter(self):
        fm, rest = extract_frontmatter("\n\n---\ntitle: Spaced\n---\nBody")
        assert fm.title == "Spaced"
        assert rest == "Body"

    def test_numeric_and_date_values_become_text(self):
        text = "---\ntitle: 1.0\ndescription: 2024-01-15\nsidebarTitle: 42\n---\nBody"
        fm, rest = extract_frontmatter(text)
        assert fm.title == "1.0"
        assert fm.description == "2024-01-15"
        assert fm.sidebar_title == "42"
        assert rest == "Body"

    def test_non_scalar_field_still_falls_back(self):
        text = "---\ntitle: [a, b]\n---\nBody"
        fm, rest = extract_frontmatter(text)
        assert fm == DocFrontmatter()
        assert rest == text
