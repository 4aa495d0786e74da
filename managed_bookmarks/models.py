"""Data models for the managed bookmarks tree and its wire format."""

from __future__ import annotations

from dataclasses import dataclass

from attrs import Factory, define, frozen
from pydantic import BaseModel, Field


@dataclass(slots=True, frozen=True)
class Row:
    """One path/name/url row read from the source sheet."""

    path: str
    name: str
    url: str


class BookmarkModel(BaseModel):
    """Pydantic model for a managed bookmark leaf."""

    name: str
    url: str


class FolderModel(BaseModel):
    """Pydantic model for a managed bookmark folder."""

    name: str
    children: list[FolderModel | BookmarkModel] = Field(default_factory=list)


FolderModel.model_rebuild()


@frozen
class BookmarkNode:
    """Leaf entry of the bookmark tree."""

    name: str
    url: str

    def to_model(self) -> BookmarkModel:
        """Convert the node into its serialisable pydantic model."""
        return BookmarkModel(name=self.name, url=self.url)


@define(slots=True)
class FolderNode:
    """Branch entry of the bookmark tree; children keep insertion order."""

    name: str
    children: list[Node] = Factory(list)

    def to_model(self) -> FolderModel:
        """Convert the folder and its subtree into pydantic models."""
        return FolderModel(
            name=self.name,
            children=[child.to_model() for child in self.children],
        )


Node = FolderNode | BookmarkNode


def get_or_create_folder(level: list[Node], folder_name: str) -> FolderNode:
    """Return the first folder named ``folder_name`` in ``level``, appending one if absent.

    Only folders are matched; a bookmark sharing the name is left alone and the
    new folder becomes its sibling.
    """
    for item in level:
        if isinstance(item, FolderNode) and item.name == folder_name:
            return item
    new_folder = FolderNode(name=folder_name)
    level.append(new_folder)
    return new_folder
