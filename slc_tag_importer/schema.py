"""
SLC/MicroLogix Symbol Constants and Namespace Rules.

Defines the data-file prefixes of the legacy addressing scheme, the folder
labels used in the target namespace, and the structural names of the
namespace XML document.
"""

from .models import DataTypeKind, SymbolCategory

# Data-type classification in priority order.  First matching prefix wins.
# Timers and counters are 32-bit accumulators on SLC/MicroLogix.
TYPE_RULES = [
    ('S', SymbolCategory.STATUS,  DataTypeKind.BOOLEAN),
    ('I', SymbolCategory.INPUT,   DataTypeKind.BOOLEAN),
    ('O', SymbolCategory.OUTPUT,  DataTypeKind.BOOLEAN),
    ('B', SymbolCategory.BOOLEAN, DataTypeKind.BOOLEAN),
    ('T', SymbolCategory.TIMER,   DataTypeKind.INT32),
    ('C', SymbolCategory.COUNTER, DataTypeKind.INT32),
    ('N', SymbolCategory.INTEGER, DataTypeKind.INT16),
    ('F', SymbolCategory.FLOAT,   DataTypeKind.FLOAT32),
]

# Folder placement is evaluated as independent chains.  Within a chain the
# first prefix wins; across chains the last chain that matched wins.
FOLDER_RULE_CHAINS = [
    [
        ('S', SymbolCategory.STATUS),
        ('I', SymbolCategory.INPUT),
        ('O', SymbolCategory.OUTPUT),
    ],
    [
        ('B', SymbolCategory.BOOLEAN),
        ('T', SymbolCategory.TIMER),
        ('C', SymbolCategory.COUNTER),
        ('N', SymbolCategory.INTEGER),
        ('F', SymbolCategory.FLOAT),
    ],
]

# Folder created under the Tags container for each category.
FOLDER_LABELS = {
    SymbolCategory.STATUS:  'StatusFile',
    SymbolCategory.INPUT:   'InputFile',
    SymbolCategory.OUTPUT:  'OutputFile',
    SymbolCategory.BOOLEAN: 'BoolFile',
    SymbolCategory.TIMER:   'TimerFile',
    SymbolCategory.COUNTER: 'CounterFile',
    SymbolCategory.INTEGER: 'IntegerFile',
    SymbolCategory.FLOAT:   'FloatFile',
}

# Universal fallback: bit-oriented files dominate the legacy scheme.
DEFAULT_CATEGORY = SymbolCategory.UNCLASSIFIED
DEFAULT_DATA_TYPE = DataTypeKind.BOOLEAN

# CSV record layout.
DIRECTIVE_MARKER = 'DFILE:'
FIELD_SEPARATOR = ','
SYMBOL_FIELD = 0
DESCRIPTION_FIELD = 3
MIN_FIELD_COUNT = 4

# Namespace document structure.
NAMESPACE_ROOT = 'Namespace'
DRIVERS_CONTAINER = 'CommDrivers'
DRIVER_ELEMENT = 'Driver'
STATION_ELEMENT = 'Station'
FOLDER_ELEMENT = 'Folder'
VARIABLE_ELEMENT = 'Variable'
TAGS_FOLDER = 'Tags'
DESCRIPTION_NAME = 'Description'
STRING_DATA_TYPE = 'String'
DEFAULT_DRIVER_TYPE = 'MicroController'

# Elements that accept children through HostTree.add_child.
CONTAINER_ELEMENTS = frozenset({DRIVER_ELEMENT, STATION_ELEMENT, FOLDER_ELEMENT})

# Valid variable data types (DataTypeKind values plus the description type).
VALID_VARIABLE_TYPES = frozenset(
    [kind.value for kind in DataTypeKind] + [STRING_DATA_TYPE]
)

MAX_NODE_NAME_LENGTH = 128
