"""
Copyright 2026 ray-cast-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .geometry import Point, Segment, geometry
from .materials import MaterialState

logger = logging.getLogger(__name__)


class SceneIntegrityError(ValueError):
    """
    Raised when an edge references a node id that no longer exists.

    Attributes:
        broken_edges (list): The offending edges
    """

    def __init__(self, broken_edges: List['Edge']) -> None:
        self.broken_edges = list(broken_edges)
        details = ', '.join(f'({e.a}, {e.b})' for e in self.broken_edges)
        super().__init__(
            f"{len(self.broken_edges)} edge(s) reference missing nodes: {details}"
        )


@dataclass
class Node:
    """A scene point with a stable integer id."""
    id: int
    position: Point


@dataclass
class Edge:
    """A connection between two node ids carrying a material."""
    a: int
    b: int
    material: MaterialState = MaterialState.REFLECTIVE

    def connects(self, a: int, b: int) -> bool:
        """True if this edge joins a and b, in either orientation."""
        return (self.a == a and self.b == b) or (self.a == b and self.b == a)

    def touches(self, node_id: int) -> bool:
        return self.a == node_id or self.b == node_id


class SceneGraph:
    """
    Owner of the editable scene: nodes keyed by id and the edges between them.

    Node ids come from a monotonic counter and are never reused, so an id
    that was removed stays retired. The solver never sees this object; it
    receives the value copies returned by snapshot_segments().

    Attributes:
        nodes (dict): Node id -> Node
        edges (list): Edges in creation order
        name (str or None): Optional name for the scene (used in exports)
    """

    def __init__(self, name: Optional[str] = None) -> None:
        self.nodes: Dict[int, Node] = {}
        self.edges: List[Edge] = []
        self.name: Optional[str] = name
        self._next_id: int = 0

    def add_node(self, position) -> int:
        """
        Add a node.

        Args:
            position: Point, (x, y) pair or {'x', 'y'} dict

        Returns:
            int: The new node's id
        """
        node_id = self._next_id
        self.nodes[node_id] = Node(node_id, Point.of(position))
        self._next_id += 1
        logger.info("Added node at %s id: %d", self.nodes[node_id].position.to_tuple(), node_id)
        return node_id

    def remove_node(self, node_id: int) -> None:
        """
        Remove a node and every edge touching it. Unknown ids are ignored.
        """
        if node_id not in self.nodes:
            return
        self.edges = [edge for edge in self.edges if not edge.touches(node_id)]
        del self.nodes[node_id]

    def move_node(self, node_id: int, position) -> None:
        """
        Raises:
            KeyError: If the node does not exist.
        """
        self.nodes[node_id].position = Point.of(position)

    def add_edge(self, a: int, b: int, material=MaterialState.REFLECTIVE) -> Optional[Edge]:
        """
        Connect two nodes.

        Args:
            a: First node id
            b: Second node id
            material: MaterialState or its string value

        Returns:
            Edge: The new edge, or None if a and b are already connected
            (in either orientation) or a == b.

        Raises:
            KeyError: If either node does not exist.
        """
        for node_id in (a, b):
            if node_id not in self.nodes:
                raise KeyError(f"No node with id {node_id}")
        if a == b:
            logger.info("Refusing to connect node %d to itself", a)
            return None
        if any(edge.connects(a, b) for edge in self.edges):
            logger.info("Connection already exists")
            return None
        edge = Edge(a, b, MaterialState.parse(material))
        self.edges.append(edge)
        logger.info("Connection created between nodes %d and %d", a, b)
        return edge

    def find_edge(self, a: int, b: int) -> Optional[Edge]:
        for edge in self.edges:
            if edge.connects(a, b):
                return edge
        return None

    def remove_edge(self, a: int, b: int) -> bool:
        """
        Returns:
            bool: True if an edge was removed.
        """
        edge = self.find_edge(a, b)
        if edge is None:
            return False
        self.edges.remove(edge)
        return True

    def set_edge_material(self, a: int, b: int, material) -> None:
        """
        Raises:
            KeyError: If the nodes are not connected.
        """
        edge = self.find_edge(a, b)
        if edge is None:
            raise KeyError(f"No edge between nodes {a} and {b}")
        edge.material = MaterialState.parse(material)

    def clear(self) -> None:
        """Remove all nodes and edges. The id counter keeps counting."""
        self.nodes.clear()
        self.edges.clear()

    def node_at(self, position, radius: float) -> Optional[int]:
        """
        Find a node whose disk of the given radius contains a position.

        Returns:
            int or None: The id of the first matching node
        """
        p = Point.of(position)
        for node_id, node in self.nodes.items():
            if geometry.distance_squared(node.position, p) <= radius * radius:
                return node_id
        return None

    def edge_at(self, position, thickness: float) -> Optional[Edge]:
        """
        Find an edge drawn with the given thickness that covers a position.

        Uses Shapely's point/line distance, which handles zero-length edges
        and positions beyond either end.

        Returns:
            Edge or None: The first matching edge (broken edges are skipped)
        """
        p = Point.of(position).to_shapely()
        for edge in self.edges:
            segment = self._resolve(edge)
            if segment is None:
                continue
            if segment.to_shapely().distance(p) <= thickness / 2.0:
                return edge
        return None

    def add_segments(self, lines: Iterable[Tuple[Tuple[float, float], Tuple[float, float]]],
                     material=MaterialState.REFLECTIVE) -> List[Edge]:
        """
        Bulk-import lines as edges, sharing nodes at identical coordinates.

        Args:
            lines: Iterable of ((x1, y1), (x2, y2)) pairs
            material: Material for every new edge

        Returns:
            list: The edges created (duplicates are skipped)
        """
        by_position: Dict[Tuple[float, float], int] = {
            node.position.to_tuple(): node_id for node_id, node in self.nodes.items()
        }
        created = []
        for start, end in lines:
            ids = []
            for xy in (start, end):
                key = Point.of(xy).to_tuple()
                if key not in by_position:
                    by_position[key] = self.add_node(key)
                ids.append(by_position[key])
            edge = self.add_edge(ids[0], ids[1], material)
            if edge is not None:
                created.append(edge)
        return created

    def _resolve(self, edge: Edge) -> Optional[Segment]:
        a = self.nodes.get(edge.a)
        b = self.nodes.get(edge.b)
        if a is None or b is None:
            return None
        return Segment(a.position, b.position, edge.material)

    def snapshot_segments(self, skip_broken: bool = False) -> List[Segment]:
        """
        Resolve every edge into a value-copied Segment for the solver.

        Args:
            skip_broken: If True, edges with a missing endpoint are logged at
                ERROR level and left out. If False, they raise.

        Returns:
            list: Segments in edge order

        Raises:
            SceneIntegrityError: If an edge references a missing node and
                skip_broken is False.
        """
        segments = []
        broken = []
        for edge in self.edges:
            segment = self._resolve(edge)
            if segment is None:
                broken.append(edge)
                continue
            segments.append(segment)

        if broken:
            if not skip_broken:
                raise SceneIntegrityError(broken)
            for edge in broken:
                missing = [i for i in (edge.a, edge.b) if i not in self.nodes]
                logger.error("Edge (%d, %d) references missing node(s) %s; dropped from snapshot",
                             edge.a, edge.b, missing)
        return segments

    def __repr__(self) -> str:
        label = f"'{self.name}', " if self.name else ''
        return f"SceneGraph({label}nodes={len(self.nodes)}, edges={len(self.edges)})"
