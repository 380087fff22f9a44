"""
Classpath Builder
=================
Produces the ``Class-Path`` value of a "pathing" manifest from the
resolved artifacts of one dependency configuration.

Pipeline (per artifact, in input order):
    1. Canonical absolute form, stringified as a file URL
    2. normalize_classpath_entry(): collapse the ``file:///`` prefix
    3. Join all tokens with a single space

Normalizing an already-normalized token is a no-op, so feeding the
output back in yields the same string.
"""
import os
import re
import logging
from typing import Iterable, Union

from buildguard.utils.path_utils import file_url

logger = logging.getLogger(__name__)

Artifact = Union[str, "os.PathLike[str]"]

# "file:" (optionally behind a stray "/") followed by three or more slashes
_FILE_URL_PREFIX = re.compile(r"^/?file:/{3,}")


def normalize_classpath_entry(token: str) -> str:
    """
    Collapse a URL-stringified path back to a slash-rooted path.

    ``file:///opt/lib/a.jar`` → ``/opt/lib/a.jar``;
    ``/file:////C:/lib/a.jar`` → ``/C:/lib/a.jar``.
    Tokens without the prefix are returned unchanged.
    """
    return _FILE_URL_PREFIX.sub("/", token, count=1)


def to_classpath_token(artifact: Artifact) -> str:
    location = os.fspath(artifact)
    if location.startswith(("file:", "/file:")):
        return normalize_classpath_entry(location)
    return normalize_classpath_entry(file_url(location))


def build_classpath(artifacts: Iterable[Artifact]) -> str:
    """
    Build the space-separated classpath for a manifest attribute.

    Parameters
    ----------
    artifacts : iterable of str | PathLike
        Resolved artifact locations, in the order the resolver produced them.

    Returns
    -------
    str
        Normalized tokens joined by single spaces, input order preserved.
    """
    tokens = [to_classpath_token(a) for a in artifacts]
    logger.debug("Class-Path built from %d artifact(s)", len(tokens))
    return " ".join(tokens)
