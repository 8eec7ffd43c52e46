import shutil
from pathlib import Path

import pytest

from pagewright.assets import AssetCopier
from pagewright.build import (
    DEFAULT_CONFIG,
    BuildError,
    BuildResult,
    build_site,
    load_config,
)
from pagewright.content import PageDiscovery

PAGE_TEMPLATE = (
    "<html><head><title>{{ title }}</title></head><body><nav>"
    "{% for entry in entries %}"
    '<a href="{{ entry.link }}"{% if entry.active %} class="active"{% endif %}>'
    "{{ entry.title }}</a>"
    "{% endfor %}"
    "</nav>{{ content }}</body></html>"
)


def create_project(tmp_path: Path) -> Path:
    project = tmp_path
    pages = project / "pages"
    (pages / "about").mkdir(parents=True)
    (project / "template").mkdir()
    (project / "assets" / "css").mkdir(parents=True)
    (project / "assets" / "images").mkdir()

    (pages / "index.md").write_text("# Welcome\n\nHello there.", encoding="utf-8")
    (pages / "config.yml").write_text('title: "Home"\n', encoding="utf-8")
    (pages / "about" / "content.md").write_text(
        "# About\n\n![Me](/assets/images/me.png)", encoding="utf-8"
    )
    (pages / "about" / "config.yml").write_text('title: "About"\n', encoding="utf-8")
    (project / "template" / "page.html").write_text(PAGE_TEMPLATE, encoding="utf-8")
    (project / "assets" / "css" / "site.css").write_text("body{}", encoding="utf-8")
    (project / "assets" / "images" / "me.png").write_bytes(b"\x89PNG")
    return project


def test_build_site_home_and_about(tmp_path):
    project = create_project(tmp_path)
    result = build_site(project)

    assert isinstance(result, BuildResult)
    assert result.output_dir == project / "compiled"
    assert len(result.pages) == 2
    assert result.assets_copied

    home = (project / "compiled" / "index.html").read_text(encoding="utf-8")
    assert "<title>Home</title>" in home
    assert '<a href="/" class="active">Home</a>' in home
    assert '<a href="/about">About</a>' in home
    assert home.count('class="active"') == 1
    assert "<p>Hello there.</p>" in home

    about = (project / "compiled" / "about" / "index.html").read_text(encoding="utf-8")
    assert "<title>About</title>" in about
    assert '<a href="/about" class="active">About</a>' in about
    assert '<a href="/">Home</a>' in about
    assert 'loading="lazy"' in about

    assert (project / "compiled" / "assets" / "css" / "site.css").read_text() == "body{}"
    assert (project / "compiled" / "assets" / "images" / "me.png").exists()


def test_build_site_title_defaults_to_empty(tmp_path):
    project = create_project(tmp_path)
    (project / "pages" / "about" / "config.yml").write_text(
        "description: ignored\n", encoding="utf-8"
    )
    build_site(project)
    about = (project / "compiled" / "about" / "index.html").read_text(encoding="utf-8")
    assert "<title></title>" in about


def test_build_site_is_deterministic(tmp_path):
    project = create_project(tmp_path)
    first = build_site(project)
    first_html = {
        p.relative_to(first.output_dir): p.read_text(encoding="utf-8")
        for p in first.output_dir.rglob("*.html")
    }
    second = build_site(project)
    second_html = {
        p.relative_to(second.output_dir): p.read_text(encoding="utf-8")
        for p in second.output_dir.rglob("*.html")
    }
    assert first_html == second_html
    assert [p.page for p in first.pages] == [p.page for p in second.pages]


def test_missing_subpage_config_aborts_before_writing(tmp_path):
    project = create_project(tmp_path)
    (project / "pages" / "about" / "config.yml").unlink()

    with pytest.raises(BuildError) as excinfo:
        build_site(project)
    assert excinfo.value.source_path == project / "pages" / "about" / "config.yml"
    assert not (project / "compiled" / "about" / "index.html").exists()


def test_malformed_yaml_aborts(tmp_path):
    project = create_project(tmp_path)
    (project / "pages" / "config.yml").write_text("title: [oops\n", encoding="utf-8")
    with pytest.raises(BuildError) as excinfo:
        build_site(project)
    assert "Invalid YAML" in excinfo.value.message


def test_missing_template_aborts(tmp_path):
    project = create_project(tmp_path)
    (project / "template" / "page.html").unlink()
    with pytest.raises(BuildError) as excinfo:
        build_site(project)
    assert excinfo.value.source_path == project / "template" / "page.html"
    assert not (project / "compiled").exists()


def test_render_error_keeps_earlier_pages(tmp_path):
    project = create_project(tmp_path)
    (project / "template" / "page.html").write_text(
        "{% if title == 'Home' %}{{ missing }}{% endif %}{{ title }}",
        encoding="utf-8",
    )
    # "about" sorts before "index.md", so it is written first
    with pytest.raises(BuildError) as excinfo:
        build_site(project)
    assert excinfo.value.source_path == project / "pages" / "index.md"
    assert (project / "compiled" / "about" / "index.html").read_text() == "About"


def test_build_without_assets_directory(tmp_path):
    project = create_project(tmp_path)
    shutil.rmtree(project / "assets")
    result = build_site(project)
    assert result.assets_copied
    assert (project / "compiled" / "index.html").exists()
    assert (project / "compiled" / "about" / "index.html").exists()
    assert not (project / "compiled" / "assets").exists()


def test_asset_copy_failure_is_advisory(monkeypatch, tmp_path, capsys):
    project = create_project(tmp_path)

    def failing_copytree(*args, **kwargs):
        raise shutil.Error([("a", "b", "disk full")])

    monkeypatch.setattr(shutil, "copytree", failing_copytree)
    result = build_site(project)
    assert not result.assets_copied
    assert (project / "compiled" / "index.html").exists()
    assert "Asset copy failed" in capsys.readouterr().out


def test_asset_copier_preserves_structure_and_merges(tmp_path):
    assets = tmp_path / "assets"
    (assets / "js" / "vendor").mkdir(parents=True)
    (assets / "js" / "vendor" / "lib.js").write_text("lib", encoding="utf-8")
    output = tmp_path / "out"
    (output / "assets").mkdir(parents=True)
    (output / "assets" / "old.txt").write_text("old", encoding="utf-8")

    assert AssetCopier(assets, output).run()
    assert (output / "assets" / "js" / "vendor" / "lib.js").read_text() == "lib"
    assert (output / "assets" / "old.txt").exists()


def test_asset_copier_missing_source_is_noop(tmp_path):
    output = tmp_path / "out"
    assert AssetCopier(tmp_path / "assets", output).run()
    assert not output.exists()


def test_clean_output_removes_stale_files(tmp_path):
    project = create_project(tmp_path)
    stale = project / "compiled" / "old" / "index.html"
    stale.parent.mkdir(parents=True)
    stale.write_text("stale", encoding="utf-8")

    build_site(project)
    assert stale.exists()

    build_site(project, clean_output=True)
    assert not stale.exists()
    assert (project / "compiled" / "index.html").exists()


def test_output_dir_override(tmp_path):
    project = create_project(tmp_path)
    target = tmp_path / "elsewhere"
    result = build_site(project, output_dir_override=target)
    assert result.output_dir == target
    assert (target / "index.html").exists()
    assert not (project / "compiled").exists()


def test_collisions_are_reported(tmp_path, capsys):
    project = create_project(tmp_path)
    for folder in ("docs/guide", "tutorials/guide"):
        target = project / "pages" / folder
        target.mkdir(parents=True)
        (target / "content.md").write_text(folder, encoding="utf-8")
        (target / "config.yml").write_text(f"title: {folder}\n", encoding="utf-8")

    result = build_site(project)
    assert len(result.pages) == 4
    out = capsys.readouterr().out
    assert "Warning:" in out
    assert "both render to" in out
    html = (project / "compiled" / "guide" / "index.html").read_text(encoding="utf-8")
    assert "<title>tutorials/guide</title>" in html


def test_load_config_defaults_and_overrides(tmp_path):
    assert load_config(tmp_path) == DEFAULT_CONFIG

    (tmp_path / "pagewright.yaml").write_text(
        "output_dir: public\nunknown: 1\n", encoding="utf-8"
    )
    config = load_config(tmp_path)
    assert config["output_dir"] == "public"
    assert config["pages_dir"] == "pages"

    (tmp_path / "pagewright.yaml").write_text("- not a mapping\n", encoding="utf-8")
    assert load_config(tmp_path) == DEFAULT_CONFIG

    (tmp_path / "pagewright.yaml").write_text("output_dir: [\n", encoding="utf-8")
    with pytest.raises(BuildError):
        load_config(tmp_path)


def test_build_uses_configured_directories(tmp_path):
    project = create_project(tmp_path)
    (project / "pages").rename(project / "content")
    (project / "pagewright.yaml").write_text(
        "pages_dir: content\noutput_dir: public\n", encoding="utf-8"
    )
    result = build_site(project)
    assert result.output_dir == project / "public"
    assert (project / "public" / "about" / "index.html").exists()


@pytest.mark.parametrize("title", ["No", "on", "0x10", "1e3"])
def test_output_title_matches_config_text(tmp_path, title):
    project = create_project(tmp_path)
    (project / "pages" / "about" / "config.yml").write_text(
        f"title: {title}\n", encoding="utf-8"
    )
    build_site(project)
    about = (project / "compiled" / "about" / "index.html").read_text(encoding="utf-8")
    assert f"<title>{title}</title>" in about


def test_template_runtime_error_aborts_build(tmp_path):
    project = create_project(tmp_path)
    (project / "template" / "page.html").write_text("{{ title + 1 }}", encoding="utf-8")
    with pytest.raises(BuildError) as excinfo:
        build_site(project)
    assert excinfo.value.message.startswith("Type error:")


def test_build_with_custom_page_source_and_renderer(tmp_path):
    project = create_project(tmp_path)
    pages_dir = project / "pages"

    class AboutOnly:
        def discover(self):
            return [
                page
                for page in PageDiscovery(pages_dir).discover()
                if page.name == "about"
            ]

    class PlainRenderer:
        def render(self, content: str) -> str:
            return f"<pre>{content}</pre>"

    result = build_site(project, page_source=AboutOnly(), renderer=PlainRenderer())
    assert [p.title for p in result.pages] == ["About"]
    about = (project / "compiled" / "about" / "index.html").read_text(encoding="utf-8")
    assert "<pre># About" in about
    assert not (project / "compiled" / "index.html").exists()
