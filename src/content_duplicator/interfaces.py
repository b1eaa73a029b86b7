"""A module defining the ContentStore protocol.

The duplication engine talks to a source and a target environment through
this protocol. Both are instances of the same contract; the concrete
implementation shipped with the package is
:class:`content_duplicator.store.ContentfulEnvironment`.

Classes:
    ContentStore: A protocol that specifies the record operations the engine
    needs from an environment.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from content_duplicator.model.records import ContentTypeCatalogue, FieldMap, Record


@runtime_checkable
class ContentStore(Protocol):
    def get_entry(self, entry_id: str) -> Record: ...

    def get_asset(self, asset_id: str) -> Record: ...

    def create_entry(self, content_type_id: str, fields: FieldMap) -> Record: ...

    def create_asset(self, fields: FieldMap) -> Record: ...

    def process_for_all_locales(self, asset: Record) -> Record: ...

    def publish(self, record: Record) -> Record: ...

    def is_published(self, record: Record) -> bool: ...

    def get_content_types(self) -> ContentTypeCatalogue: ...
