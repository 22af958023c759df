__version__ = "0.1.0"

from .models import (
    Category as Category,
    AdjPosition as AdjPosition,
    Flags as Flags,
    LexicalUnit as LexicalUnit,
    Sense as Sense,
    Synset as Synset,
    Member as Member,
    VerbTemplate as VerbTemplate,
    VerbFrame as VerbFrame,
    Model as Model,
)

from .exceptions import (
    GrinderError as GrinderError,
    CompatibilityError as CompatibilityError,
    UnsupportedRelationError as UnsupportedRelationError,
    UnknownIdentifierError as UnknownIdentifierError,
    ConsistencyError as ConsistencyError,
    OffsetMismatchError as OffsetMismatchError,
    OrderingError as OrderingError,
    DataImportError as DataImportError,
    ParseError as ParseError,
)

from .formatter import (
    OEWN_HEADER as OEWN_HEADER,
    PRINCETON_HEADER as PRINCETON_HEADER,
)

from .encoder import (
    RelationPolicy as RelationPolicy,
    SynsetEncoder as SynsetEncoder,
)

from .ordering import (
    BaselineIndex as BaselineIndex,
    BaselineMode as BaselineMode,
    SenseOrder as SenseOrder,
)

from .offsets import (
    OffsetResolver as OffsetResolver,
    read_offsets as read_offsets,
    write_offsets as write_offsets,
    serialize_offsets as serialize_offsets,
    deserialize_offsets as deserialize_offsets,
)

from .word_index import WordIndexBuilder as WordIndexBuilder
from .sense_index import SenseIndexBuilder as SenseIndexBuilder

from .exporter import (
    ExportSummary as ExportSummary,
    compute_offsets as compute_offsets,
    export_wndb as export_wndb,
    export_offsets as export_offsets,
    produce_line as produce_line,
)

from .importer import (
    load_lmf as load_lmf,
    model_from_resource as model_from_resource,
    unmap_sense_id as unmap_sense_id,
)

from .config import (
    GrindConfig as GrindConfig,
    load_config as load_config,
)

__all__ = [
    "Category",
    "AdjPosition",
    "Flags",
    "LexicalUnit",
    "Sense",
    "Synset",
    "Member",
    "VerbTemplate",
    "VerbFrame",
    "Model",
    "GrinderError",
    "CompatibilityError",
    "UnsupportedRelationError",
    "UnknownIdentifierError",
    "ConsistencyError",
    "OffsetMismatchError",
    "OrderingError",
    "DataImportError",
    "ParseError",
    "OEWN_HEADER",
    "PRINCETON_HEADER",
    "RelationPolicy",
    "SynsetEncoder",
    "BaselineIndex",
    "BaselineMode",
    "SenseOrder",
    "OffsetResolver",
    "read_offsets",
    "write_offsets",
    "serialize_offsets",
    "deserialize_offsets",
    "WordIndexBuilder",
    "SenseIndexBuilder",
    "ExportSummary",
    "compute_offsets",
    "export_wndb",
    "export_offsets",
    "produce_line",
    "load_lmf",
    "model_from_resource",
    "unmap_sense_id",
    "GrindConfig",
    "load_config",
]
