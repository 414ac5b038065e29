"""Typed property decoding and encoding.

Tiled stores every property value as an XML attribute string together with a
``type`` attribute (``string`` when absent). Values are decoded to the matching
Python type so consumers can use them directly::

    <property name="Blocked" type="bool" value="true"/>   -> True
    <property name="jump" value="down"/>                  -> "down"
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from config_io.schema import Property, PropertySet, PropertyType, PropertyValue
from tileset.errors import SchemaViolation

_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

_BOOL_VALUES = {"true": True, "1": True, "false": False, "0": False}


def parse_type(raw: str | None) -> PropertyType:
    if raw is None or raw == "":
        return PropertyType.STRING
    try:
        return PropertyType(raw)
    except ValueError:
        supported = ", ".join(t.value for t in PropertyType)
        raise SchemaViolation(
            f"unsupported property type {raw!r} (expected one of: {supported})"
        ) from None


def decode_value(raw: str, ptype: PropertyType) -> PropertyValue:
    """Convert the raw attribute string to the Python value for ``ptype``."""
    if ptype is PropertyType.BOOL:
        try:
            return _BOOL_VALUES[raw.strip().lower()]
        except KeyError:
            raise SchemaViolation(f"invalid bool value {raw!r}") from None
    if ptype in (PropertyType.INT, PropertyType.OBJECT):
        try:
            return int(raw)
        except ValueError:
            raise SchemaViolation(f"invalid {ptype.value} value {raw!r}") from None
    if ptype is PropertyType.FLOAT:
        try:
            return float(raw)
        except ValueError:
            raise SchemaViolation(f"invalid float value {raw!r}") from None
    if ptype is PropertyType.COLOR:
        if raw and not _COLOR_RE.match(raw):
            raise SchemaViolation(f"invalid color value {raw!r}")
        return raw
    return raw


def encode_value(value: PropertyValue, ptype: PropertyType) -> str:
    """Inverse of :func:`decode_value`."""
    if ptype is PropertyType.BOOL:
        return "true" if value else "false"
    if ptype is PropertyType.FLOAT:
        # Tiled writes whole floats without a fractional part
        f = float(value)
        return str(int(f)) if f.is_integer() else repr(f)
    return str(value)


def parse_property(elem: ET.Element) -> Property:
    name = elem.get("name")
    if not name:
        raise SchemaViolation("property without a name attribute")
    ptype = parse_type(elem.get("type"))
    raw = elem.get("value")
    if raw is None:
        # multi-line strings are stored as element text
        raw = elem.text or ""
    try:
        value = decode_value(raw, ptype)
    except SchemaViolation as e:
        raise SchemaViolation(f"property {name!r}: {e}") from None
    return Property(name=name, type=ptype, value=value)


def parse_properties(elem: ET.Element | None, owner: str = "tileset") -> PropertySet:
    """Build a PropertySet from a ``<properties>`` element (or None)."""
    if elem is None:
        return PropertySet()
    items: list[Property] = []
    seen: set[str] = set()
    for child in elem.findall("property"):
        prop = parse_property(child)
        if prop.name in seen:
            raise SchemaViolation(f"duplicate property {prop.name!r} in {owner}")
        seen.add(prop.name)
        items.append(prop)
    return PropertySet(items=tuple(items))


def properties_to_xml(props: PropertySet) -> ET.Element:
    elem = ET.Element("properties")
    for p in props.items:
        child = ET.SubElement(elem, "property", name=p.name)
        if p.type is not PropertyType.STRING:
            child.set("type", p.type.value)
        text = encode_value(p.value, p.type)
        if "\n" in text:
            child.text = text
        else:
            child.set("value", text)
    return elem


def property_to_dict(p: Property) -> dict:
    return {"name": p.name, "type": p.type.value, "value": p.value}
