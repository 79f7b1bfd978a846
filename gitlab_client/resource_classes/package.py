from datetime import datetime
from enum import Enum

from pydantic import Field

from gitlab_client._resource_base import BaseModelObject

from .dynamic_enum import DynamicEnum


class PackageType(str, Enum):
    # Not an API value. Listing with ALL leaves the package_type filter out.
    ALL = "all"
    CONAN = "conan"
    MAVEN = "maven"
    NPM = "npm"
    PYPI = "pypi"
    COMPOSER = "composer"
    NUGET = "nuget"
    HELM = "helm"
    TERRAFORM_MODULE = "terraform_module"
    GOLANG = "golang"
    GENERIC = "generic"
    DEBIAN = "debian"
    RUBYGEMS = "rubygems"
    ML_MODEL = "ml_model"


class PackageStatus(str, Enum):
    DEFAULT = "default"
    HIDDEN = "hidden"
    PROCESSING = "processing"
    ERROR = "error"
    PENDING_DESTRUCTION = "pending_destruction"


class PackageLinks(BaseModelObject):
    web_path: str | None = None
    delete_api_path: str | None = None


class PackageSearchResult(BaseModelObject):
    """A package as returned by the package listing and get endpoints."""

    id: int
    name: str
    version: str | None = None
    package_type: DynamicEnum[PackageType] | None = None
    status: DynamicEnum[PackageStatus] | None = None
    created_at: datetime | None = None
    last_downloaded_at: datetime | None = None
    links: PackageLinks | None = Field(None, alias="_links")
    tags: list[str] | None = None

    def __str__(self) -> str:
        return f"{self.name}@{self.version}" if self.version else self.name


class Package(BaseModelObject):
    """The package file record returned when publishing with select=package_file."""

    id: int
    package_id: int
    file_name: str
    size: int | None = None
    file_store: int | None = None
    file_md5: str | None = None
    file_sha1: str | None = None
    file_sha256: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
