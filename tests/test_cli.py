import json
from pathlib import Path

from click.testing import CliRunner

from mdx_docs.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliParse:
    def test_parse_json(self):
        runner = CliRunner()
        result = runner.invoke(main, ["parse", str(FIXTURES / "quickstart.mdx")])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["frontmatter"]["title"] == "Quickstart"
        assert data["frontmatter"]["sidebarTitle"] == "Start here"
        assert data["content"][1]["kind"] == "callout"

    def test_parse_markdown_to_file(self, tmp_path):
        output_file = tmp_path / "out" / "quickstart.md"
        runner = CliRunner()
        result = runner.invoke(main, [
            "parse", str(FIXTURES / "quickstart.mdx"),
            "--format", "markdown",
            "-o", str(output_file),
        ])

        assert result.exit_code == 0
        assert output_file.exists()
        assert "> **Note:**" in output_file.read_text(encoding="utf-8")

    def test_missing_file(self):
        runner = CliRunner()
        result = runner.invoke(main, ["parse", "does-not-exist.mdx"])
        assert result.exit_code != 0


class TestCliHeaders:
    def test_headers(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--log-level", "debug", "headers", str(FIXTURES / "quickstart.mdx")])

        assert result.exit_code == 0
        assert "- Install (#install)" in result.output
        assert "  - Next steps (#next-steps)" in result.output


class TestCliOpenApi:
    def test_list_operations(self):
        runner = CliRunner()
        result = runner.invoke(main, ["openapi", str(FIXTURES / "petstore.yaml")])

        assert result.exit_code == 0
        assert "Petstore 1.0.0" in result.output
        assert "Found 5 operations." in result.output
        assert "[list-pets]" in result.output

    def test_curl_uses_first_server(self):
        runner = CliRunner()
        result = runner.invoke(main, ["openapi", str(FIXTURES / "petstore.yaml"), "--curl"])

        assert result.exit_code == 0
        assert '"https://petstore.example.com/v1/pets?limit=20"' in result.output

    def test_curl_base_url_override(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            "openapi", str(FIXTURES / "users.json"),
            "--curl", "--base-url", "http://localhost:8000",
        ])

        assert result.exit_code == 0
        assert '"http://localhost:8000/users/string"' in result.output

    def test_curl_default_base_url(self):
        runner = CliRunner()
        result = runner.invoke(main, ["openapi", str(FIXTURES / "users.json"), "--curl"])
        assert '"https://api.example.com/users/string"' in result.output

    def test_invalid_spec(self, tmp_path):
        spec_file = tmp_path / "swagger.yaml"
        spec_file.write_text("swagger: '2.0'\ninfo: {title: x, version: '1'}\n")
        runner = CliRunner()
        result = runner.invoke(main, ["openapi", str(spec_file)])

        assert result.exit_code == 1
        assert "Missing 'openapi' version field" in result.output


class TestCliHighlight:
    def test_highlight(self, tmp_path):
        code_file = tmp_path / "example.py"
        code_file.write_text("x = 1\n")
        runner = CliRunner()
        result = runner.invoke(main, ["highlight", str(code_file), "--language", "py"])

        assert result.exit_code == 0
        assert "<span" in result.output
