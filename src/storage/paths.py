"""
Virtual path utilities.

A virtual path has the shape ``<container>/<blob-name>``. The first segment is
the container; everything after the first slash is the blob name, which may
itself contain slashes:

- docs/report.txt            -> ("docs", "report.txt")
- images/2024/01/cat.jpg     -> ("images", "2024/01/cat.jpg")
"""

from src.storage.errors import InvalidPathError

SEPARATOR = "/"


class BlobPaths:
    """Splitting and joining of virtual paths."""

    @staticmethod
    def split(path: str) -> tuple[str, str]:
        """
        Split a virtual path into container and blob name.

        Args:
            path: Virtual path like "docs/report.txt"

        Returns:
            Tuple of (container, blob_name)

        Raises:
            InvalidPathError: If the container or blob name is empty
        """
        normalized = path.lstrip(SEPARATOR)
        container, sep, blob_name = normalized.partition(SEPARATOR)
        if not container:
            raise InvalidPathError(path, "missing container")
        if not sep or not blob_name:
            raise InvalidPathError(path, "missing blob name")
        return container, blob_name

    @staticmethod
    def join(container: str, blob_name: str) -> str:
        """Build a virtual path from container and blob name."""
        if not container or SEPARATOR in container:
            raise InvalidPathError(f"{container}{SEPARATOR}{blob_name}", "bad container name")
        if not blob_name:
            raise InvalidPathError(f"{container}{SEPARATOR}", "missing blob name")
        return f"{container}{SEPARATOR}{blob_name}"

    @staticmethod
    def container_name(dirname: str) -> str:
        """
        Validate a directory name that must be exactly one container.

        Surrounding slashes are ignored; "docs/tmp" is rejected rather than
        resolved to "docs".
        """
        container = dirname.strip(SEPARATOR)
        if not container:
            raise InvalidPathError(dirname, "missing container")
        if SEPARATOR in container:
            raise InvalidPathError(dirname, "directory must be a single container name")
        return container

    @staticmethod
    def split_directory(directory: str) -> tuple[str, str | None]:
        """
        Split a listing directory into container and optional directory prefix.

        The prefix always ends with a separator, so "docs/sub" matches
        "sub/b.txt" but not "subway.txt".

        "docs" -> ("docs", None); "docs/2024" -> ("docs", "2024/")
        """
        normalized = directory.strip(SEPARATOR)
        container, _, prefix = normalized.partition(SEPARATOR)
        if not container:
            raise InvalidPathError(directory, "missing container")
        if not prefix:
            return container, None
        return container, f"{prefix}{SEPARATOR}"

    @staticmethod
    def get_extension(path: str) -> str:
        """Get file extension from path."""
        name = path.rsplit(SEPARATOR, 1)[-1]
        return name.rsplit(".", 1)[-1] if "." in name else ""
