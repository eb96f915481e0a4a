"""
Host namespace access for the tag importer.

The importer never manipulates the target namespace directly.  It talks to a
:class:`HostTree`, a small capability interface:

    get_child      -- look up a direct child by name
    make_folder    -- build a detached folder node
    make_variable  -- build a detached typed variable node
    add_child      -- attach a node under a parent
    find_driver    -- resolve a communication driver reference
    get_station    -- resolve a station under a driver

:class:`XmlNamespace` implements the interface over an lxml element tree.
A namespace document looks like::

    <Namespace>
      <CommDrivers>
        <Driver Name="MicroController1" Type="MicroController">
          <Station Name="Station1">
            <Folder Name="Tags">
              <Folder Name="IntegerFile">
                <Variable Name="N7_0" DataType="Int16" SymbolName="N7:0">
                  <Variable Name="Description" DataType="String"><![CDATA[Speed setpoint]]></Variable>
                </Variable>
              </Folder>
            </Folder>
          </Station>
        </Driver>
      </CommDrivers>
    </Namespace>
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from lxml import etree

from .schema import (
    CONTAINER_ELEMENTS,
    DEFAULT_DRIVER_TYPE,
    DESCRIPTION_NAME,
    DRIVER_ELEMENT,
    DRIVERS_CONTAINER,
    FOLDER_ELEMENT,
    NAMESPACE_ROOT,
    STATION_ELEMENT,
    STRING_DATA_TYPE,
    TAGS_FOLDER,
    VALID_VARIABLE_TYPES,
    VARIABLE_ELEMENT,
)
from .utils import (
    namespace_to_bytes,
    parse_namespace_bytes,
    parse_namespace_file,
    set_element_cdata,
    validate_node_name,
    write_namespace_file,
)

logger = logging.getLogger(__name__)

_NODE_ELEMENTS = (DRIVER_ELEMENT, STATION_ELEMENT, FOLDER_ELEMENT, VARIABLE_ELEMENT)


class HostTree(ABC):
    """Capability interface over the target runtime's node namespace.

    Nodes are opaque to the importer; only the implementation inspects
    them.  Methods that build or attach nodes raise ``ValueError`` when the
    host rejects the request.
    """

    @abstractmethod
    def get_child(self, parent: Any, name: str) -> Optional[Any]:
        """Return the direct child of *parent* named *name*, or ``None``."""

    @abstractmethod
    def make_folder(self, name: str) -> Any:
        """Build a detached folder node."""

    @abstractmethod
    def make_variable(
        self,
        name: str,
        data_type: str,
        symbol_name: Optional[str] = None,
        value: Optional[str] = None,
    ) -> Any:
        """Build a detached variable node with a declared data type."""

    @abstractmethod
    def add_child(self, parent: Any, child: Any) -> None:
        """Attach *child* under *parent*."""

    @abstractmethod
    def find_driver(self, driver_ref: str) -> Optional[Any]:
        """Resolve *driver_ref* to a communication driver node, or ``None``."""

    @abstractmethod
    def get_station(self, driver: Any, station_ref: str) -> Optional[Any]:
        """Return the station named by *station_ref* under *driver*."""

    @abstractmethod
    def node_name(self, node: Any) -> str:
        """Return the browse name of *node*."""


class XmlNamespace(HostTree):
    """Host namespace held in memory as an lxml element tree."""

    def __init__(self, root: Optional[etree._Element] = None):
        """Wrap an existing ``<Namespace>`` element or create an empty one."""
        if root is None:
            root = etree.Element(NAMESPACE_ROOT)
            etree.SubElement(root, DRIVERS_CONTAINER)
        elif root.tag != NAMESPACE_ROOT:
            raise ValueError(
                f"Expected '{NAMESPACE_ROOT}' root, got '{root.tag}'"
            )
        self._root = root
        self._file_path: Optional[str] = None

    # ------------------------------------------------------------------
    # Construction and I/O
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, file_path: str) -> 'XmlNamespace':
        """Load a namespace document from disk.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the root element is not ``Namespace``.
            etree.XMLSyntaxError: If the XML is malformed.
        """
        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"Namespace file not found: {file_path}")
        logger.info("Loading namespace file: %s", file_path)
        instance = cls(parse_namespace_file(file_path))
        instance._file_path = os.path.abspath(file_path)
        return instance

    @classmethod
    def from_string(cls, text: str) -> 'XmlNamespace':
        """Parse a namespace document held in a string."""
        return cls(parse_namespace_bytes(text.encode('utf-8')))

    @property
    def file_path(self) -> Optional[str]:
        return self._file_path

    def write(self, file_path: Optional[str] = None) -> str:
        """Write the namespace to *file_path* (default: the loaded path).

        Returns:
            The path written to.

        Raises:
            ValueError: If no path is given and none was loaded.
        """
        target = file_path or self._file_path
        if not target:
            raise ValueError("No file path given and no file was loaded.")
        write_namespace_file(self._root, target)
        self._file_path = os.path.abspath(target)
        logger.info("Saved namespace to: %s", target)
        return target

    def to_string(self) -> str:
        return namespace_to_bytes(self._root).decode('utf-8')

    # ------------------------------------------------------------------
    # Driver / station setup
    # ------------------------------------------------------------------

    @property
    def drivers_element(self) -> etree._Element:
        container = self._root.find(DRIVERS_CONTAINER)
        if container is None:
            container = etree.SubElement(self._root, DRIVERS_CONTAINER)
        return container

    def add_driver(
        self, name: str, driver_type: str = DEFAULT_DRIVER_TYPE
    ) -> etree._Element:
        """Create a communication driver node.

        Raises:
            ValueError: If the name is invalid or already in use.
        """
        validate_node_name(name)
        if self.find_driver(name) is not None:
            raise ValueError(f"Driver '{name}' already exists")
        return etree.SubElement(
            self.drivers_element, DRIVER_ELEMENT, Name=name, Type=driver_type
        )

    def add_station(self, driver: etree._Element, name: str) -> etree._Element:
        """Create a station under *driver*, with its empty ``Tags`` folder."""
        validate_node_name(name)
        if driver is None or driver.tag != DRIVER_ELEMENT:
            raise ValueError("Stations can only be added under a driver")
        station = etree.Element(STATION_ELEMENT, Name=name)
        self.add_child(driver, station)
        etree.SubElement(station, FOLDER_ELEMENT, Name=TAGS_FOLDER)
        return station

    # ------------------------------------------------------------------
    # HostTree capability
    # ------------------------------------------------------------------

    def get_child(self, parent, name):
        if parent is None:
            return None
        for child in parent.iterchildren(*_NODE_ELEMENTS):
            if child.get('Name') == name:
                return child
        return None

    def make_folder(self, name):
        validate_node_name(name)
        return etree.Element(FOLDER_ELEMENT, Name=name)

    def make_variable(self, name, data_type, symbol_name=None, value=None):
        validate_node_name(name)
        data_type = str(getattr(data_type, 'value', data_type))
        if data_type not in VALID_VARIABLE_TYPES:
            raise ValueError(
                f"Unsupported data type '{data_type}'. "
                f"Valid types: {sorted(VALID_VARIABLE_TYPES)}"
            )
        var = etree.Element(VARIABLE_ELEMENT, Name=name, DataType=data_type)
        if symbol_name is not None:
            var.set('SymbolName', symbol_name)
        if value:
            set_element_cdata(var, value)
        return var

    def add_child(self, parent, child):
        if parent is None:
            raise ValueError("Cannot attach a node to a missing parent")
        if child.getparent() is not None:
            raise ValueError(
                f"Node '{child.get('Name')}' is already attached"
            )
        if parent.tag not in CONTAINER_ELEMENTS and not (
            parent.tag == VARIABLE_ELEMENT and child.tag == VARIABLE_ELEMENT
        ):
            raise ValueError(
                f"<{parent.tag}> '{parent.get('Name')}' cannot contain "
                f"<{child.tag}> nodes"
            )
        name = child.get('Name')
        if self.get_child(parent, name) is not None:
            raise ValueError(
                f"'{parent.get('Name')}' already has a child named '{name}'"
            )
        parent.append(child)

    def find_driver(self, driver_ref):
        if not driver_ref:
            return None
        # Accept either a bare name or a browse path ending in the name.
        name = driver_ref.strip().rstrip('/').rsplit('/', 1)[-1]
        for driver in self.drivers_element.iterchildren(DRIVER_ELEMENT):
            if driver.get('Name') == name:
                return driver
        return None

    def get_station(self, driver, station_ref):
        if driver is None or not station_ref:
            return None
        name = station_ref.strip().rstrip('/').rsplit('/', 1)[-1]
        station = self.get_child(driver, name)
        if station is None or station.tag != STATION_ELEMENT:
            return None
        return station

    def node_name(self, node):
        return node.get('Name', '')

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def resolve_path(self, path: str) -> etree._Element:
        """Resolve a browse path such as ``MicroController1/Station1/Tags``.

        The first segment names a driver; the remaining segments walk child
        nodes by name.

        Raises:
            KeyError: If any segment does not exist.
        """
        parts = [p for p in path.strip().split('/') if p]
        if parts and parts[0] == DRIVERS_CONTAINER:
            parts = parts[1:]
        if not parts:
            raise KeyError("Empty namespace path")
        node = self.find_driver(parts[0])
        if node is None:
            raise KeyError(f"Driver '{parts[0]}' not found in namespace")
        for part in parts[1:]:
            child = self.get_child(node, part)
            if child is None:
                raise KeyError(
                    f"'{part}' not found under '{node.get('Name')}'"
                )
            node = child
        return node

    def describe(self, node: etree._Element) -> Dict[str, Any]:
        """Return a plain-dict summary of *node*."""
        info: Dict[str, Any] = {
            'name': node.get('Name', ''),
            'kind': node.tag,
        }
        if node.tag == VARIABLE_ELEMENT:
            info['data_type'] = node.get('DataType', '')
            symbol = node.get('SymbolName')
            if symbol is not None:
                info['symbol_name'] = symbol
            desc = self.get_child(node, DESCRIPTION_NAME)
            if desc is not None:
                info['description'] = desc.text or ''
        elif node.tag == DRIVER_ELEMENT:
            info['type'] = node.get('Type', '')
        return info

    def list_children(self, node: etree._Element) -> List[Dict[str, Any]]:
        """Describe every direct child node of *node*."""
        return [self.describe(c) for c in node.iterchildren(*_NODE_ELEMENTS)]

    def get_description(self, variable: etree._Element) -> Optional[str]:
        """Return the ``Description`` child value of *variable*, if any."""
        desc = self.get_child(variable, DESCRIPTION_NAME)
        if desc is None or desc.get('DataType') != STRING_DATA_TYPE:
            return None
        return desc.text or ''
