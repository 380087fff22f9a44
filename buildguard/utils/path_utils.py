"""
Path Utils
==========
Helpers that map build-level identifiers onto filesystem locations.

Responsibilities:
    - Map a fully-qualified Java class name to its conventional source file
    - Render a filesystem location in file-URL form
"""
import os

from buildguard.core.constants import JAVA_SOURCE_DIR, JAVA_SOURCE_EXTENSION


def class_source_path(source_root: str, class_name: str) -> str:
    """
    Expected source file of a class under the Maven/Gradle main source set.

    ``com.acme.Config`` under ``/proj`` maps to
    ``/proj/src/main/java/com/acme/Config.java``. The class name is used
    verbatim: no trimming, no validation.
    """
    source_dir = os.path.join(source_root, *JAVA_SOURCE_DIR)
    return os.path.join(source_dir, class_name.replace(".", os.sep) + JAVA_SOURCE_EXTENSION)


def file_url(location: str) -> str:
    """
    Absolute, forward-slash form of location prefixed with ``file:///``.

    Characters are not percent-encoded, the same as a plain
    path-to-URL stringification.
    """
    absolute = os.path.abspath(location).replace("\\", "/")
    return "file:///" + absolute.lstrip("/")
