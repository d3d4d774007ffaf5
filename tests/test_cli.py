from pathlib import Path

from click.testing import CliRunner

from folio.cli import cli


def create_project(tmp_path: Path) -> Path:
    project = tmp_path / "site"
    pages = project / "content" / "pages"
    (pages / "blog").mkdir(parents=True)
    (project / "folio.yaml").write_text("title: Fruit\n", encoding="utf-8")
    (pages / "index.md").write_text("# Home\n\nWelcome.\n", encoding="utf-8")
    (pages / "blog.md").write_text("# Blog\n\nAll the news.\n", encoding="utf-8")
    (pages / "blog" / "first.md").write_text(
        "Date: 31 December 2008\nCategories: blog\nSummary: Short\n\n# First post\n\nHello.\n",
        encoding="utf-8",
    )
    (pages / "about.md").write_text(
        "Categories: blog:1\n\n# About\n\nAbout us.\n", encoding="utf-8"
    )
    (project / "content" / "menu.txt").write_text("blog\n  about\n", encoding="utf-8")
    return project


def run(project: Path, *args: str):
    runner = CliRunner()
    return runner.invoke(cli, ["--project", str(project), *args], catch_exceptions=False)


def test_cli_pages(tmp_path):
    result = run(create_project(tmp_path), "pages")
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "/about\tAbout" in lines
    assert "/blog/first\tFirst post" in lines
    assert "/\tHome" in lines


def test_cli_articles(tmp_path):
    result = run(create_project(tmp_path), "articles")
    assert result.exit_code == 0
    assert result.output == "2008-12-31\t/blog/first\tFirst post\n"


def test_cli_show(tmp_path):
    result = run(create_project(tmp_path), "show", "blog/first")
    assert result.exit_code == 0
    assert "Title: First post - Fruit" in result.output
    assert "Parent: /blog" in result.output
    assert "Categories: /blog" in result.output
    assert "Date: 31 December 2008" in result.output
    assert "<p>Short</p>" in result.output


def test_cli_show_missing_page(tmp_path):
    result = CliRunner().invoke(cli, ["--project", str(create_project(tmp_path)), "show", "nope"])
    assert result.exit_code != 0
    assert "No page found for path '/nope'" in result.output


def test_cli_category(tmp_path):
    result = run(create_project(tmp_path), "category", "blog")
    assert result.exit_code == 0
    assert "  /about\tAbout" in result.output
    assert "  2008-12-31\t/blog/first\tFirst post" in result.output


def test_cli_menu(tmp_path):
    result = run(create_project(tmp_path), "menu")
    assert result.exit_code == 0
    assert result.output == "/blog\n  /about\n"


def test_cli_bad_config(tmp_path):
    project = create_project(tmp_path)
    (project / "folio.yaml").write_text("- not a mapping\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--project", str(project), "pages"])
    assert result.exit_code != 0
    assert "expected a mapping" in result.output


def test_module_main_entrypoint():
    from folio.__main__ import main

    assert callable(main)
