"""XML serialization for property list trees."""

from plistxml.serialization.xml_encoder import dump, dumps, to_xml
from plistxml.serialization.xml_decoder import from_xml, load, loads

__all__ = [
    "to_xml",
    "from_xml",
    "dumps",
    "dump",
    "loads",
    "load",
]
