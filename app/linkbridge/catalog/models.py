"""Catalog service models.

The catalog service speaks PascalCase JSON (Jellyfin/Emby style); the
models below accept that wire format and expose snake_case attributes.
"""

import os
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class CatalogFolder(BaseModel):
    """A virtual folder owned by the catalog service.

    Attributes:
        name: Display name of the folder.
        locations: Filesystem paths the folder indexes.
        collection_type: Collection type reported by the service.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    name: str = Field(alias="Name")
    locations: list[str] = Field(default_factory=list, alias="Locations")
    collection_type: str | None = Field(default=None, alias="CollectionType")

    def matches(self, name: str) -> bool:
        """Check if this folder has the given name (case-insensitive)."""
        return self.name.casefold() == name.casefold()

    def has_location(self, path: str) -> bool:
        """Check if a path is already one of this folder's locations."""
        wanted = os.path.normpath(path)
        return any(os.path.normpath(location) == wanted for location in self.locations)


@dataclass(frozen=True, slots=True)
class EnsureOutcome:
    """Which steps an ensure-folder call had to perform.

    Attributes:
        folder_created: The folder did not exist and was created.
        path_added: The path was added to the folder's locations.
    """

    folder_created: bool = False
    path_added: bool = False

    @property
    def changed(self) -> bool:
        """Check if the catalog was mutated."""
        return self.folder_created or self.path_added
