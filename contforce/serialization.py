"""XML serialization of ContForce objects."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from .force import ContForce

_TYPE_NAME = "ContForce"
_VERSION = 1
_ROOT_TAG = "Force"


def _format_double(value: float) -> str:
    return repr(float(value))


def _int_property(node: ET.Element, name: str) -> int:
    raw = node.get(name)
    if raw is None:
        raise ValueError(f"Unknown property '{name}' in node '{node.tag}'")
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Property '{name}' in node '{node.tag}' is not an integer: {raw!r}") from None


def _double_property(node: ET.Element, name: str) -> float:
    raw = node.get(name)
    if raw is None:
        raise ValueError(f"Unknown property '{name}' in node '{node.tag}'")
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Property '{name}' in node '{node.tag}' is not a number: {raw!r}") from None


def serialize(force: ContForce) -> str:
    """Return an XML document describing every term of ``force``."""
    root = ET.Element(_ROOT_TAG, {"type": _TYPE_NAME, "version": str(_VERSION)})
    bonds = ET.SubElement(root, "Bonds")
    for bond in force.bonds:
        if not 0 <= bond.npart <= len(bond.idxs):
            raise ValueError(
                f"npart {bond.npart} does not fit the {len(bond.idxs)} particle indices given"
            )
        element = ET.SubElement(
            bonds,
            "Bond",
            {
                "npart": str(bond.npart),
                "d": _format_double(bond.length),
                "k": _format_double(bond.k),
            },
        )
        for idx in bond.idxs[: bond.npart]:
            ET.SubElement(element, "Index", {"idx": str(idx)})
    return ET.tostring(root, encoding="unicode")


def deserialize(text: str) -> ContForce:
    """Rebuild a ContForce from a document written by :func:`serialize`."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ValueError(f"Malformed XML: {exc}") from None
    node_type = root.get("type")
    if node_type is not None and node_type != _TYPE_NAME:
        raise ValueError(f"Cannot deserialize an object of type '{node_type}'")
    if _int_property(root, "version") != _VERSION:
        raise ValueError("Unsupported version number")
    bonds = root.find("Bonds")
    if bonds is None:
        raise ValueError("Unknown child 'Bonds' in node '{}'".format(root.tag))
    force = ContForce()
    for bond in bonds:
        idxs = [_int_property(index, "idx") for index in bond]
        force.add_bond(
            idxs,
            _int_property(bond, "npart"),
            _double_property(bond, "d"),
            _double_property(bond, "k"),
        )
    return force