from dataclasses import dataclass
from typing import BinaryIO

from gitlab_client.resource_classes.package import PackageStatus


@dataclass(frozen=True)
class PackagePublish:
    """A file to upload to the generic package registry.

    Args:
        package_name: Name of the package.
        package_version: Version of the package, for example 1.0.0.
        file_name: Name of the file within the package.
        package_stream: The file content, as bytes or a binary file object. A file object is read
            into memory in full before the upload, so files larger than the available memory
            cannot be published.
        status: Status of the package once published. The server default is "default".
    """

    package_name: str
    package_version: str
    file_name: str
    package_stream: bytes | BinaryIO
    status: PackageStatus | None = None

    def read_content(self) -> bytes:
        """The whole file content, read from the current position of a file object."""
        if isinstance(self.package_stream, bytes | bytearray):
            return bytes(self.package_stream)
        return self.package_stream.read()
