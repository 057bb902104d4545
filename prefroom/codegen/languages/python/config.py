"""
Python-specific type mappings.

Maps the Java-flavoured types of a class tree onto Python annotations.
"""

from typing import Dict, Set

# Qualified (erased) type name -> Python spelling
PYTHON_TYPE_MAP: Dict[str, str] = {
    "void": "None",
    "boolean": "bool",
    "byte": "int",
    "short": "int",
    "int": "int",
    "long": "int",
    "char": "str",
    "float": "float",
    "double": "float",
    "java.lang.String": "str",
    "java.lang.CharSequence": "str",
    "java.lang.Boolean": "bool",
    "java.lang.Integer": "int",
    "java.lang.Long": "int",
    "java.lang.Float": "float",
    "java.lang.Double": "float",
    "java.lang.Object": "Any",
    "java.util.List": "List",
    "java.util.ArrayList": "List",
    "java.util.Set": "Set",
    "java.util.Map": "Dict",
}

# Names that come from the typing module
TYPING_NAMES: Set[str] = {"Any", "Dict", "List", "Optional", "Set"}

DEFAULT_RUNTIME_MODULE = "prefroom.runtime"
UNINITIALIZED_ERROR = "UninitializedStateError"
LOCK_ATTRIBUTE = "_lock"
