"""
Manifest Class Validator
========================
Checks that every @Configuration class declared in a spring.factories
manifest has a source file in the project.

Rules:
    - Missing manifest → nothing to check, pass.
    - Only the two recognised keys are inspected (bootstrap first,
      then auto-configuration). Every other key is ignored.
    - Values are split on "," with NO trimming.
    - The first missing class stops validation and fails the step.
"""
import os
import logging

from buildguard.core.constants import RECOGNIZED_FACTORY_KEYS
from buildguard.core.errors import MalformedManifest, MissingConfigurationClass
from buildguard.models.manifest_entry import ManifestEntry
from buildguard.parser.properties_reader import load_properties
from buildguard.utils.path_utils import class_source_path

logger = logging.getLogger(__name__)


def split_class_list(value: str) -> list[str]:
    """
    Split a comma-separated class list.

    Trailing empty tokens are dropped (``"A,B,"`` → ``["A", "B"]``); a value
    without any comma is returned as a single token, even when empty.
    """
    parts = value.split(",")
    if len(parts) == 1:
        return parts
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def read_manifest_entries(manifest_path: str) -> list[ManifestEntry]:
    """
    Load the recognised entries of a manifest, in processing order.

    Returns an empty list if the manifest does not exist.
    """
    if not os.path.exists(manifest_path):
        return []

    try:
        properties = load_properties(manifest_path)
    except (OSError, ValueError) as e:
        raise MalformedManifest(manifest_path, str(e)) from e

    return [
        ManifestEntry(key=key, class_names=split_class_list(properties[key]))
        for key in RECOGNIZED_FACTORY_KEYS
        if key in properties
    ]


def check_entry(entry: ManifestEntry, source_root: str) -> None:
    """Raise MissingConfigurationClass for the first class without a source file."""
    for class_name in entry.class_names:
        expected = class_source_path(source_root, class_name)
        if not os.path.exists(expected):
            raise MissingConfigurationClass(class_name, expected, key=entry.key)
        logger.debug("Found %s at %s", class_name, expected)


def validate_manifest(manifest_path: str, source_root: str) -> list[ManifestEntry]:
    """
    Validate a spring.factories manifest against the source tree.

    Parameters
    ----------
    manifest_path : str
        Path to the properties file. May not exist.
    source_root : str
        Project directory containing ``src/main/java``.

    Returns
    -------
    list[ManifestEntry]
        The entries that were checked (all passed).

    Raises
    ------
    MissingConfigurationClass
        Naming the first listed class whose source file is missing.
    MalformedManifest
        If the manifest exists but cannot be read or holds a bad escape.
    """
    manifest_path = os.fspath(manifest_path)
    source_root = os.path.abspath(source_root)

    if not os.path.exists(manifest_path):
        logger.debug("No manifest at %s, nothing to verify", manifest_path)
        return []

    entries = read_manifest_entries(manifest_path)
    for entry in entries:
        check_entry(entry, source_root)
        logger.info(
            "Verified %d class(es) for %s", len(entry.class_names), entry.key,
        )

    return entries
