"""Documentation registry.

Holds every parsed page, the navigation config, the registered OpenAPI
specs and a prebuilt search index. Built once from in-memory sources and
then only read.
"""

import json
import logging

from pydantic import BaseModel, ConfigDict

from mdx_docs.openapi.base import ApiOperation, ApiTag, HttpMethod, OpenApiSpec
from mdx_docs.openapi.errors import OpenApiError
from mdx_docs.openapi.swagger import parse_openapi
from mdx_docs.parser.base import ParsedDoc
from mdx_docs.parser.document import parse_document

logger = logging.getLogger(__name__)

DEFAULT_API_GROUP_NAME = "API Reference"
UNTAGGED_GROUP = "Other"
PREVIEW_CHARS = 200


class NavGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    group: str
    tab: str | None = None
    pages: list[str]


class NavConfig(BaseModel):
    """Sidebar navigation, as read from ``_nav.json``."""

    model_config = ConfigDict(frozen=True)

    tabs: list[str] = []
    groups: list[NavGroup]

    def has_tabs(self) -> bool:
        return len(self.tabs) > 1

    def groups_for_tab(self, tab: str) -> list[NavGroup]:
        return [g for g in self.groups if g.tab == tab]


class ApiEndpointEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    method: HttpMethod


class SearchEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    title: str
    description: str = ""
    content_preview: str = ""
    breadcrumb: str = ""
    api_method: HttpMethod | None = None


def _operation_title(op: ApiOperation) -> str:
    return op.summary or op.slug().replace("-", " ")


def _page_name(page: str) -> str:
    return page.rsplit("/", 1)[-1]


class DocsRegistry:
    """Parsed docs, nav and OpenAPI specs keyed by docs path."""

    def __init__(
        self,
        nav: NavConfig,
        parsed_docs: dict[str, ParsedDoc],
        openapi_specs: list[tuple[str, OpenApiSpec]],
        default_path: str = "",
        api_group_name: str = DEFAULT_API_GROUP_NAME,
    ):
        self.nav = nav
        self.parsed_docs = parsed_docs
        self.openapi_specs = openapi_specs
        self.default_path = default_path
        self.api_group_name = api_group_name
        self.search_index = self._build_search_index()

    @classmethod
    def from_sources(
        cls,
        nav: NavConfig | dict | str,
        docs: dict[str, str],
        openapi_specs: dict[str, str] | None = None,
        default_path: str | None = None,
        api_group_name: str | None = None,
    ) -> "DocsRegistry":
        """Build a registry from raw sources.

        Args:
            nav: NavConfig, its dict form, or ``_nav.json`` text.
            docs: docs path -> MDX text.
            openapi_specs: URL prefix -> OpenAPI YAML/JSON text. A spec that
                fails to parse is logged and left out.
            default_path: Landing page; defaults to the first nav page.
            api_group_name: Nav group name used for API endpoint pages.
        """
        if isinstance(nav, str):
            nav = json.loads(nav)
        if not isinstance(nav, NavConfig):
            nav = NavConfig.model_validate(nav)

        parsed_docs = {path: parse_document(text) for path, text in docs.items()}

        specs = []
        for prefix, text in (openapi_specs or {}).items():
            try:
                specs.append((prefix, parse_openapi(text)))
            except OpenApiError as e:
                logger.error(f"Failed to parse OpenAPI spec for {prefix}: {e}")

        if default_path is None:
            first_group = nav.groups[0] if nav.groups else None
            default_path = first_group.pages[0] if first_group and first_group.pages else ""

        return cls(
            nav=nav,
            parsed_docs=parsed_docs,
            openapi_specs=specs,
            default_path=default_path,
            api_group_name=api_group_name or DEFAULT_API_GROUP_NAME,
        )

    # Docs

    def get_parsed_doc(self, path: str) -> ParsedDoc | None:
        return self.parsed_docs.get(path)

    def get_doc_title(self, path: str) -> str | None:
        doc = self.get_parsed_doc(path)
        if doc is None or not doc.frontmatter.title:
            return None
        return doc.frontmatter.title

    def get_doc_icon(self, path: str) -> str | None:
        doc = self.get_parsed_doc(path)
        return doc.frontmatter.icon if doc else None

    def get_sidebar_title(self, path: str) -> str | None:
        """Sidebar label: an API operation's title, else sidebarTitle, else title."""
        op = self.get_api_operation(path)
        if op is not None:
            return _operation_title(op)

        doc = self.get_parsed_doc(path)
        if doc is None:
            return None
        return doc.frontmatter.sidebar_title or doc.frontmatter.title or None

    def get_doc_content(self, path: str) -> str | None:
        doc = self.get_parsed_doc(path)
        return doc.raw_markdown if doc else None

    def get_all_paths(self) -> list[str]:
        return list(self.parsed_docs)

    # OpenAPI

    def get_api_operation(self, path: str) -> ApiOperation | None:
        """Find an operation by docs path, e.g. ``api-reference/list-pets``."""
        for prefix, spec in self.openapi_specs:
            if not path.startswith(f"{prefix}/"):
                continue
            slug = path[len(prefix) + 1:]
            for op in spec.operations:
                if op.slug() == slug:
                    return op
        return None

    def get_api_spec(self, prefix: str) -> OpenApiSpec | None:
        for p, spec in self.openapi_specs:
            if p == prefix:
                return spec
        return None

    def get_first_api_spec(self) -> OpenApiSpec | None:
        return self.openapi_specs[0][1] if self.openapi_specs else None

    def get_first_api_prefix(self) -> str | None:
        return self.openapi_specs[0][0] if self.openapi_specs else None

    def get_api_sidebar_entries(self) -> list[tuple[ApiTag, list[ApiEndpointEntry]]]:
        """Endpoints grouped by declared tag; the rest go under "Other"."""
        groups = []
        for _, spec in self.openapi_specs:
            declared = {tag.name for tag in spec.tags}
            for tag in spec.tags:
                entries = [
                    self._endpoint_entry(op) for op in spec.operations if tag.name in op.tags
                ]
                if entries:
                    groups.append((tag, entries))

            untagged = [
                self._endpoint_entry(op)
                for op in spec.operations
                if not any(t in declared for t in op.tags)
            ]
            if untagged:
                groups.append((ApiTag(name=UNTAGGED_GROUP), untagged))
        return groups

    @staticmethod
    def _endpoint_entry(op: ApiOperation) -> ApiEndpointEntry:
        return ApiEndpointEntry(slug=op.slug(), title=_operation_title(op), method=op.method)

    def get_api_endpoint_paths(self) -> list[str]:
        return [
            f"{prefix}/{op.slug()}"
            for prefix, spec in self.openapi_specs
            for op in spec.operations
        ]

    def tab_for_path(self, path: str) -> str | None:
        """Tab of the nav group listing ``path``; API pages use the API group's tab."""
        for group in self.nav.groups:
            if path in group.pages:
                return group.tab

        for prefix, _ in self.openapi_specs:
            if path.startswith(f"{prefix}/"):
                for group in self.nav.groups:
                    if group.group == self.api_group_name:
                        return group.tab
        return None

    # llms.txt

    def _nav_docs(self):
        for group in self.nav.groups:
            for page in group.pages:
                doc = self.get_parsed_doc(page)
                if doc is not None:
                    yield page, doc

    def generate_llms_txt(self, site_title: str, site_description: str, base_url: str) -> str:
        """Index of every nav page with its title and description."""
        lines = [f"# {site_title}\n\n> {site_description}\n\n"]
        for page, doc in self._nav_docs():
            title = doc.frontmatter.title or _page_name(page)
            url = f"{base_url}/docs/{page}"
            desc = doc.frontmatter.description
            lines.append(f"- [{title}]({url}): {desc}\n" if desc else f"- [{title}]({url})\n")
        return "".join(lines)

    def generate_llms_full_txt(self, site_title: str, site_description: str, base_url: str) -> str:
        """Every nav page's flattened markdown, one section per page."""
        parts = [f"# {site_title}\n\n> {site_description}\n\n"]
        for page, doc in self._nav_docs():
            title = doc.frontmatter.title or _page_name(page)
            parts.append(f"---\n\n## [{title}]({base_url}/docs/{page})\n\n")
            parts.append(f"{doc.raw_markdown}\n\n")
        return "".join(parts)

    # Search

    def _build_search_index(self) -> list[SearchEntry]:
        entries = []
        for group in self.nav.groups:
            for page in group.pages:
                doc = self.get_parsed_doc(page)
                if doc is None:
                    continue
                entries.append(
                    SearchEntry(
                        path=page,
                        title=doc.frontmatter.title or _page_name(page).replace("-", " "),
                        description=doc.frontmatter.description or "",
                        content_preview=doc.raw_markdown[:PREVIEW_CHARS],
                        breadcrumb=group.group,
                    )
                )

        for prefix, spec in self.openapi_specs:
            for op in spec.operations:
                description = op.description or ""
                tag = op.tags[0] if op.tags else UNTAGGED_GROUP
                entries.append(
                    SearchEntry(
                        path=f"{prefix}/{op.slug()}",
                        title=_operation_title(op),
                        description=description,
                        content_preview=description,
                        breadcrumb=f"{self.api_group_name} > {tag}",
                        api_method=op.method,
                    )
                )
        return entries

    def search_docs(self, query: str) -> list[SearchEntry]:
        """Case-insensitive search: title matches first, then description, then content."""
        q = query.strip().lower()
        if not q:
            return []

        title_hits, desc_hits, content_hits = [], [], []
        for entry in self.search_index:
            if q in entry.title.lower():
                title_hits.append(entry)
            elif q in entry.description.lower():
                desc_hits.append(entry)
            elif q in entry.content_preview.lower():
                content_hits.append(entry)
        return title_hits + desc_hits + content_hits
