# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit

from conduit.metadata.declarations import (
    MethodDeclaration,
    declare,
    instance_metadata,
    record_listing,
    record_method,
)
from conduit.metadata.store import InstanceSide, MetadataKind, MetadataStore, metadata

__all__ = [
    "InstanceSide",
    "MetadataKind",
    "MetadataStore",
    "metadata",
    "MethodDeclaration",
    "declare",
    "instance_metadata",
    "record_listing",
    "record_method",
]
