"""Tests for the builder, bundler command line, and zip archiver."""

from __future__ import annotations

import json
import zipfile
from pathlib import Path

import pytest

from cmssy_cli.build.archiver import ZipArchiver
from cmssy_cli.build.builder import build_resource, find_entry_point, output_dir_for
from cmssy_cli.build.bundler import BundleOptions, BundleResult, EsbuildBundler
from cmssy_cli.client.errors import BundlerError, ManifestError
from cmssy_cli.discovery.loader import load_resource_config
from cmssy_cli.models.resource import ScannedResource


class FakeBundler:
    def __init__(self, sourcemap: bool = True, stylesheet: bool = False) -> None:
        self.sourcemap = sourcemap
        self.stylesheet = stylesheet
        self.calls: list[tuple[Path, BundleOptions]] = []

    def bundle(self, entry_point: Path, options: BundleOptions) -> BundleResult:
        self.calls.append((entry_point, options))
        return BundleResult(
            script=b"export default 1;",
            sourcemap=b"{}" if self.sourcemap else None,
            stylesheet=b".hero{}" if self.stylesheet else None,
        )


def _resource(item: Path, package_json: dict | None) -> ScannedResource:
    declaration = load_resource_config(item)
    return ScannedResource(
        type="block",
        name=item.name,
        path=item,
        package_json=package_json,
        resource_config=declaration.to_config() if declaration else None,
    )


class TestBuilder:
    def test_entry_point_preference(self, tmp_path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "index.js").write_text("")
        (tmp_path / "src" / "index.ts").write_text("")
        assert find_entry_point(tmp_path).name == "index.ts"

    def test_no_entry_point(self, tmp_path):
        assert find_entry_point(tmp_path) is None

    def test_output_dir(self, tmp_path):
        resource = ScannedResource(
            type="block", name="hero", path=tmp_path,
            package_json={"name": "@acme/hero", "version": "1.0.0"},
        )
        assert output_dir_for(resource, Path("public")) == Path("public/@acme/hero/1.0.0")

    def test_output_dir_requires_version(self, tmp_path):
        resource = ScannedResource(type="block", name="hero", path=tmp_path)
        with pytest.raises(ManifestError):
            output_dir_for(resource, Path("public"))

    def test_build_writes_outputs(self, project, hero_config, tmp_path):
        pkg = {"name": "@acme/hero", "version": "1.0.0"}
        item = project.add_block("hero", config=hero_config, package_json=pkg)
        bundler = FakeBundler(stylesheet=True)
        dest = build_resource(_resource(item, pkg), tmp_path / "public", bundler, BundleOptions())

        assert dest == tmp_path / "public" / "@acme" / "hero" / "1.0.0"
        assert (dest / "index.js").read_bytes() == b"export default 1;"
        assert (dest / "index.js.map").exists()
        assert (dest / "index.css").exists()
        manifest = json.loads((dest / "package.json").read_text())
        assert manifest["name"] == "@acme/hero"
        assert manifest["cmssy"]["displayName"] == "Hero"
        assert manifest["cmssy"]["defaultContent"] == {"subtitle": "Welcome"}
        assert bundler.calls[0][0].name == "index.tsx"

    def test_build_leaves_source_manifest_untouched(self, project, hero_config, tmp_path):
        pkg = {"name": "hero", "version": "1.0.0"}
        item = project.add_block("hero", config=hero_config, package_json=pkg)
        build_resource(_resource(item, pkg), tmp_path / "out", FakeBundler(), BundleOptions())
        assert "cmssy" not in json.loads((item / "package.json").read_text())

    def test_optional_outputs_absent(self, project, hero_config, tmp_path):
        pkg = {"name": "hero", "version": "1.0.0"}
        item = project.add_block("hero", config=hero_config, package_json=pkg)
        dest = build_resource(
            _resource(item, pkg), tmp_path / "out", FakeBundler(sourcemap=False), BundleOptions(),
        )
        assert not (dest / "index.js.map").exists()
        assert not (dest / "index.css").exists()

    def test_missing_entry_point(self, project, hero_config, tmp_path):
        pkg = {"name": "hero", "version": "1.0.0"}
        item = project.add_block("hero", config=hero_config, package_json=pkg, source=None)
        with pytest.raises(BundlerError, match="No entry point"):
            build_resource(_resource(item, pkg), tmp_path / "out", FakeBundler(), BundleOptions())


class TestEsbuildBundler:
    def test_command(self, monkeypatch, tmp_path):
        monkeypatch.setattr("shutil.which", lambda name: f"/usr/bin/{name}")
        cmd = EsbuildBundler().command(
            tmp_path / "index.tsx",
            tmp_path / "out.js",
            BundleOptions(minify=False, external=["react"]),
        )
        assert cmd[0] == "/usr/bin/esbuild"
        assert "--jsx=automatic" in cmd
        assert "--sourcemap" in cmd
        assert "--minify" not in cmd
        assert "--external:react" in cmd

    def test_missing_executable(self, monkeypatch, tmp_path):
        monkeypatch.setattr("shutil.which", lambda name: None)
        with pytest.raises(BundlerError, match="not found on PATH"):
            EsbuildBundler().bundle(tmp_path / "index.tsx", BundleOptions())


class TestZipArchiver:
    def test_archive_contents(self, tmp_path):
        src = tmp_path / "src"
        (src / "nested").mkdir(parents=True)
        (src / "index.tsx").write_text("x")
        (src / "nested" / "util.ts").write_text("y")
        readme = tmp_path / "README.md"
        readme.write_text("# Hero")

        out = tmp_path / "hero-1.0.0.zip"
        archive = ZipArchiver().create_archive(out)
        archive.add_directory(src, "src")
        archive.add_file(readme, "README.md")
        size = archive.finalize()

        assert size == out.stat().st_size
        assert not (tmp_path / "hero-1.0.0.zip.partial").exists()
        with zipfile.ZipFile(out) as zf:
            assert sorted(zf.namelist()) == [
                "README.md", "src/index.tsx", "src/nested/util.ts",
            ]
            assert zf.getinfo("README.md").compress_type == zipfile.ZIP_DEFLATED

    def test_abort_on_error(self, tmp_path):
        out = tmp_path / "hero.zip"
        with pytest.raises(RuntimeError):
            with ZipArchiver().create_archive(out) as archive:
                archive.add_file(Path(__file__), "test.py")
                raise RuntimeError("boom")
        assert not out.exists()
        assert not (tmp_path / "hero.zip.partial").exists()
