"""
Unit Tests — Manifest Class Validator
=====================================
Builds tiny project trees in tmp_path with a spring.factories manifest
and checks first-miss failure, key ordering and benign absence.
"""
import os
import textwrap

import pytest

from buildguard.core.constants import AUTO_CONFIGURATION_KEY, BOOTSTRAP_CONFIGURATION_KEY
from buildguard.core.errors import BuildCheckError, MalformedManifest, MissingConfigurationClass
from buildguard.executor.step_runner import run_step
from buildguard.services.manifest_validator import (
    read_manifest_entries,
    split_class_list,
    validate_manifest,
)
from buildguard.utils.path_utils import class_source_path


def _add_class(project, class_name):
    path = project / "src" / "main" / "java" / (class_name.replace(".", "/") + ".java")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"// {class_name}\n", encoding="utf-8")


def _write_manifest(project, content):
    path = project / "src" / "main" / "resources" / "META-INF" / "spring.factories"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return str(path)


# ---------------------------------------------------------------------------
# 1. Helpers
# ---------------------------------------------------------------------------
class TestHelpers:

    def test_class_source_path(self, tmp_path):
        expected = os.path.join(str(tmp_path), "src", "main", "java", "A", "B", "C.java")
        assert class_source_path(str(tmp_path), "A.B.C") == expected

    def test_split_keeps_whitespace(self):
        assert split_class_list("A.B, C.D") == ["A.B", " C.D"]

    def test_split_drops_trailing_empty(self):
        assert split_class_list("A.B,C.D,") == ["A.B", "C.D"]

    def test_split_single_value(self):
        assert split_class_list("A.B") == ["A.B"]


# ---------------------------------------------------------------------------
# 2. Validation
# ---------------------------------------------------------------------------
class TestValidateManifest:

    def test_missing_manifest_passes(self, tmp_path):
        missing = str(tmp_path / "src/main/resources/META-INF/spring.factories")
        assert validate_manifest(missing, str(tmp_path)) == []

    def test_all_classes_present(self, tmp_path):
        _add_class(tmp_path, "com.acme.FooConfig")
        _add_class(tmp_path, "com.acme.BarConfig")
        manifest = _write_manifest(tmp_path, f"""\
            {AUTO_CONFIGURATION_KEY}=\\
            com.acme.FooConfig,\\
            com.acme.BarConfig
        """)
        entries = validate_manifest(manifest, str(tmp_path))
        assert entries[0].class_names == ["com.acme.FooConfig", "com.acme.BarConfig"]

    def test_missing_class_is_named(self, tmp_path):
        _add_class(tmp_path, "A.B.C")
        manifest = _write_manifest(tmp_path, f"{AUTO_CONFIGURATION_KEY}=A.B.C,D.E\n")
        with pytest.raises(MissingConfigurationClass) as exc:
            validate_manifest(manifest, str(tmp_path))
        assert exc.value.class_name == "D.E"
        assert "D.E" in str(exc.value)

    @pytest.mark.parametrize("listing, first_missing", [
        ("X.One,Y.Two", "X.One"),
        ("Y.Two,X.One", "Y.Two"),
    ])
    def test_first_miss_follows_list_order(self, tmp_path, listing, first_missing):
        manifest = _write_manifest(tmp_path, f"{AUTO_CONFIGURATION_KEY}={listing}\n")
        with pytest.raises(MissingConfigurationClass) as exc:
            validate_manifest(manifest, str(tmp_path))
        assert exc.value.class_name == first_missing

    def test_bootstrap_key_checked_first(self, tmp_path):
        manifest = _write_manifest(tmp_path, f"""\
            {AUTO_CONFIGURATION_KEY}=auto.Missing
            {BOOTSTRAP_CONFIGURATION_KEY}=boot.Missing
        """)
        with pytest.raises(MissingConfigurationClass) as exc:
            validate_manifest(manifest, str(tmp_path))
        assert exc.value.class_name == "boot.Missing"
        assert exc.value.key == BOOTSTRAP_CONFIGURATION_KEY

    def test_second_key_checked_after_first_passes(self, tmp_path):
        _add_class(tmp_path, "boot.Present")
        manifest = _write_manifest(tmp_path, f"""\
            {BOOTSTRAP_CONFIGURATION_KEY}=boot.Present
            {AUTO_CONFIGURATION_KEY}=auto.Missing
        """)
        with pytest.raises(MissingConfigurationClass) as exc:
            validate_manifest(manifest, str(tmp_path))
        assert exc.value.class_name == "auto.Missing"

    def test_unrecognized_keys_ignored(self, tmp_path):
        manifest = _write_manifest(tmp_path, """\
            # listeners are not verified
            org.springframework.context.ApplicationListener=com.acme.Missing
        """)
        assert validate_manifest(manifest, str(tmp_path)) == []

    def test_embedded_whitespace_is_not_trimmed(self, tmp_path):
        _add_class(tmp_path, "com.acme.A")
        _add_class(tmp_path, "com.acme.B")
        manifest = _write_manifest(tmp_path, f"{AUTO_CONFIGURATION_KEY}=com.acme.A, com.acme.B\n")
        with pytest.raises(MissingConfigurationClass) as exc:
            validate_manifest(manifest, str(tmp_path))
        assert exc.value.class_name == " com.acme.B"


class TestReadManifestEntries:

    def test_entries_in_recognized_order(self, tmp_path):
        manifest = _write_manifest(tmp_path, f"""\
            {AUTO_CONFIGURATION_KEY}=a.A
            {BOOTSTRAP_CONFIGURATION_KEY}=b.B
        """)
        keys = [e.key for e in read_manifest_entries(manifest)]
        assert keys == [BOOTSTRAP_CONFIGURATION_KEY, AUTO_CONFIGURATION_KEY]

    def test_missing_manifest(self, tmp_path):
        assert read_manifest_entries(str(tmp_path / "none")) == []


# ---------------------------------------------------------------------------
# 3. Unreadable manifests
# ---------------------------------------------------------------------------
class TestMalformedManifest:

    def test_non_utf8_comment_still_validates(self, tmp_path):
        _add_class(tmp_path, "a.B")
        path = tmp_path / "spring.factories"
        path.write_bytes(b"# Caf\xe9 config\n" + f"{AUTO_CONFIGURATION_KEY}=a.B\n".encode("ascii"))
        outcome = run_step("verify", lambda: validate_manifest(str(path), str(tmp_path)))
        assert outcome.succeeded

    def test_bad_unicode_escape_names_manifest(self, tmp_path):
        manifest = _write_manifest(tmp_path, f"{AUTO_CONFIGURATION_KEY}=a.\\u12G4\n")
        with pytest.raises(MalformedManifest) as exc:
            validate_manifest(manifest, str(tmp_path))
        assert manifest in str(exc.value)
        assert isinstance(exc.value, BuildCheckError)

    def test_bad_escape_recorded_as_step_failure(self, tmp_path):
        manifest = _write_manifest(tmp_path, f"{AUTO_CONFIGURATION_KEY}=\\u00\n")
        outcome = run_step("verify", lambda: validate_manifest(manifest, str(tmp_path)))
        assert not outcome.succeeded
        assert outcome.failures[0].kind == "MALFORMED_INPUT"
