import json
import logging
from pathlib import Path

import pytest

from mdx_docs.openapi.base import HttpMethod
from mdx_docs.registry import DocsRegistry, NavConfig

FIXTURES = Path(__file__).parent / "fixtures"

NAV = {
    "tabs": ["Docs", "API"],
    "groups": [
        {"group": "Getting Started", "tab": "Docs", "pages": ["quickstart", "guides/auth"]},
        {"group": "API Reference", "tab": "API", "pages": []},
    ],
}

AUTH_PAGE = "---\ntitle: Authentication\ndescription: Use API keys\n---\n\nSend your token in the header."


@pytest.fixture
def registry():
    return DocsRegistry.from_sources(
        nav=NAV,
        docs={
            "quickstart": (FIXTURES / "quickstart.mdx").read_text(encoding="utf-8"),
            "guides/auth": AUTH_PAGE,
            "orphan": "No frontmatter here",
        },
        openapi_specs={"api-reference": (FIXTURES / "petstore.yaml").read_text(encoding="utf-8")},
    )


class TestNavConfig:
    def test_tabs(self):
        nav = NavConfig.model_validate(NAV)
        assert nav.has_tabs() is True
        assert [g.group for g in nav.groups_for_tab("Docs")] == ["Getting Started"]

    def test_single_tab(self):
        nav = NavConfig.model_validate({"groups": [{"group": "G", "pages": ["a"]}]})
        assert nav.has_tabs() is False
        assert nav.groups[0].tab is None


class TestRegistryBuild:
    def test_nav_from_json_text(self):
        reg = DocsRegistry.from_sources(nav=json.dumps(NAV), docs={})
        assert reg.nav.tabs == ["Docs", "API"]

    def test_default_path_is_first_page(self, registry):
        assert registry.default_path == "quickstart"
        assert registry.api_group_name == "API Reference"

    def test_explicit_default_path(self):
        reg = DocsRegistry.from_sources(nav=NAV, docs={}, default_path="guides/auth", api_group_name="API")
        assert reg.default_path == "guides/auth"
        assert reg.api_group_name == "API"

    def test_broken_spec_is_skipped(self, caplog):
        with caplog.at_level(logging.ERROR):
            reg = DocsRegistry.from_sources(
                nav=NAV,
                docs={},
                openapi_specs={
                    "broken": "openapi: [bad",
                    "api-reference": (FIXTURES / "petstore.yaml").read_text(encoding="utf-8"),
                },
            )
        assert reg.get_api_spec("broken") is None
        assert reg.get_first_api_prefix() == "api-reference"
        assert "broken" in caplog.text

    def test_wrongly_typed_spec_does_not_block_others(self, caplog):
        bad = "openapi: 3.0.0\ninfo: {title: Bad, version: '1'}\npaths:\n  /x:\n    get: {summary: 404}\n"
        with caplog.at_level(logging.ERROR):
            reg = DocsRegistry.from_sources(
                nav={"groups": []},
                docs={},
                openapi_specs={
                    "bad": bad,
                    "api-reference": (FIXTURES / "petstore.yaml").read_text(encoding="utf-8"),
                },
            )
        assert reg.get_api_spec("bad") is None
        assert reg.get_api_spec("api-reference").info.title == "Petstore"
        assert "Failed to parse OpenAPI spec for bad" in caplog.text


class TestDocLookups:
    def test_titles_and_icons(self, registry):
        assert registry.get_doc_title("quickstart") == "Quickstart"
        assert registry.get_doc_title("orphan") is None
        assert registry.get_doc_title("missing") is None
        assert registry.get_doc_icon("quickstart") == "rocket"

    def test_sidebar_title(self, registry):
        assert registry.get_sidebar_title("quickstart") == "Start here"
        assert registry.get_sidebar_title("guides/auth") == "Authentication"
        assert registry.get_sidebar_title("orphan") is None

    def test_content(self, registry):
        assert "Send your token" in registry.get_doc_content("guides/auth")
        assert registry.get_doc_content("missing") is None
        assert sorted(registry.get_all_paths()) == ["guides/auth", "orphan", "quickstart"]


class TestApiLookups:
    def test_operation_by_path(self, registry):
        op = registry.get_api_operation("api-reference/list-pets")
        assert op.summary == "List all pets"
        assert registry.get_api_operation("api-reference/nope") is None
        assert registry.get_api_operation("list-pets") is None

    def test_operation_sidebar_titles(self, registry):
        assert registry.get_sidebar_title("api-reference/get-pets-petId") == "Info for a specific pet"
        assert registry.get_sidebar_title("api-reference/delete-pet") == "delete pet"

    def test_specs(self, registry):
        assert registry.get_api_spec("api-reference").info.title == "Petstore"
        assert registry.get_first_api_spec().info.title == "Petstore"
        assert registry.get_first_api_prefix() == "api-reference"

    def test_sidebar_entries_grouped_by_tag(self, registry):
        groups = registry.get_api_sidebar_entries()
        assert [(tag.name, [e.slug for e in entries]) for tag, entries in groups] == [
            ("pets", ["list-pets", "create-pet", "get-pets-petId"]),
            ("store", ["get-inventory"]),
            ("Other", ["delete-pet"]),
        ]
        assert groups[0][1][0].method == HttpMethod.GET

    def test_endpoint_paths(self, registry):
        paths = registry.get_api_endpoint_paths()
        assert len(paths) == 5
        assert paths[0] == "api-reference/list-pets"

    def test_tab_for_path(self, registry):
        assert registry.tab_for_path("guides/auth") == "Docs"
        assert registry.tab_for_path("api-reference/list-pets") == "API"
        assert registry.tab_for_path("nowhere") is None

    def test_no_specs(self):
        reg = DocsRegistry.from_sources(nav=NAV, docs={})
        assert reg.get_first_api_spec() is None
        assert reg.get_first_api_prefix() is None
        assert reg.get_api_sidebar_entries() == []


class TestSearch:
    def test_title_match(self, registry):
        results = registry.search_docs("quick")
        assert results[0].path == "quickstart"
        assert results[0].breadcrumb == "Getting Started"

    def test_description_and_content_matches(self, registry):
        assert [r.path for r in registry.search_docs("api keys")] == ["guides/auth"]
        assert [r.path for r in registry.search_docs("token")] == ["guides/auth"]

    def test_title_matches_rank_first(self, registry):
        results = registry.search_docs("inventor")
        assert results[0].path == "api-reference/get-inventory"
        assert results[0].api_method == HttpMethod.GET
        assert results[0].breadcrumb == "API Reference > store"

    def test_blank_query(self, registry):
        assert registry.search_docs("   ") == []

    def test_orphan_pages_not_indexed(self, registry):
        assert registry.search_docs("frontmatter") == []


class TestLlmsTxt:
    def test_index(self, registry):
        out = registry.generate_llms_txt("Example", "Example docs", "https://x.dev")
        assert out.startswith("# Example\n\n> Example docs\n\n")
        assert "- [Quickstart](https://x.dev/docs/quickstart): Get up and running in five minutes\n" in out
        assert "- [Authentication](https://x.dev/docs/guides/auth): Use API keys\n" in out
        assert "orphan" not in out

    def test_full(self, registry):
        out = registry.generate_llms_full_txt("Example", "Example docs", "https://x.dev")
        assert "---\n\n## [Authentication](https://x.dev/docs/guides/auth)\n\n" in out
        assert "Send your token in the header." in out
