"""
Graph data structures, fixture graphs and TU Dortmund dataset loader
"""

import os
import zipfile
from bisect import insort
from collections import defaultdict
from itertools import combinations
from typing import Dict, Iterable, List, Optional, Set, Tuple

import numpy as np
import requests

from .graph_access import GraphAccess, MappingGraph


class Vertex:
    """Graph vertex with label"""
    def __init__(self, vid: int, label: int):
        self.vid = vid
        self.label = label

    def __repr__(self):
        return f"V({self.vid},{self.label})"


class Edge:
    """Undirected graph edge with label"""
    def __init__(self, frm: int, to: int, elabel: int = 0):
        self.frm = frm
        self.to = to
        self.elabel = elabel

    def __repr__(self):
        return f"E({self.frm}-{self.to},{self.elabel})"

    @property
    def key(self) -> Tuple[int, int, int]:
        """Direction-free identity: both endpoints in id order plus the label"""
        return min(self.frm, self.to), max(self.frm, self.to), self.elabel

    def __hash__(self):
        return hash(self.key)

    def __eq__(self, other):
        return isinstance(other, Edge) and self.key == other.key


class Graph(GraphAccess):
    """
    Labelled undirected graph
    Adjacency lists are kept sorted by vertex id, so the linear-time
    extension path applies under the natural order of the ids
    """
    def __init__(self, gid: int = 0):
        self.gid = gid
        self.vertices: List[Vertex] = []
        self.edges: List[Edge] = []
        self.edge_set: Set[Edge] = set()
        self.vertex_map: Dict[int, Vertex] = {}
        self.adj: Dict[int, List[int]] = defaultdict(list)
        self.label = None  # Graph class label (e.g., mutagen/non-mutagen)

    def add_vertex(self, vid: int, vlabel: int = 0):
        if vid in self.vertex_map:
            raise ValueError(f"Vertex {vid} already exists in graph {self.gid}")
        v = Vertex(vid, vlabel)
        self.vertices.append(v)
        self.vertex_map[vid] = v
        return v

    def add_edge(self, frm: int, to: int, elabel: int = 0):
        if frm not in self.vertex_map or to not in self.vertex_map:
            raise ValueError(f"Edge {frm}-{to} references a missing vertex")
        if frm == to:
            raise ValueError(f"Self-loop on vertex {frm} is not supported")
        e = Edge(frm, to, elabel)
        self.edges.append(e)
        self.edge_set.add(e)
        # Parallel edges share one adjacency entry
        if to not in self.adj[frm]:
            insort(self.adj[frm], to)
            insort(self.adj[to], frm)
        return e

    def has_edge(self, frm: int, to: int, elabel: int = 0) -> bool:
        """True if an edge frm-to with this label exists, in either direction"""
        return Edge(frm, to, elabel) in self.edge_set

    # GraphAccess
    def nodes(self) -> List[int]:
        return [v.vid for v in self.vertices]

    def neighbors(self, vid: int) -> List[int]:
        return self.adj.get(vid, [])

    def adjacency_sorted(self) -> bool:
        return True

    def adjacency_sorted_under(self, order) -> bool:
        # sorted by vertex id only
        return order.is_natural

    def label_of(self, vid: int) -> int:
        return self.vertex_map[vid].label

    def get_vertex_labels(self) -> Set[int]:
        return set(v.label for v in self.vertices)

    def get_edge_labels(self) -> Set[int]:
        return set(e.elabel for e in self.edges)

    def induced_edges(self, vids: Iterable[int]) -> List[Edge]:
        """Edges with both endpoints in vids"""
        members = set(vids)
        return [e for e in self.edges if e.frm in members and e.to in members]

    def induced_subgraph(self, vids: Iterable[int]) -> "Graph":
        members = set(vids)
        sub = Graph(self.gid)
        for v in self.vertices:
            if v.vid in members:
                sub.add_vertex(v.vid, v.label)
        for e in self.induced_edges(members):
            sub.add_edge(e.frm, e.to, e.elabel)
        return sub

    def is_connected(self) -> bool:
        if len(self.vertices) <= 1:
            return True

        visited = set()
        stack = [self.vertices[0].vid]

        while stack:
            v = stack.pop()
            if v in visited:
                continue
            visited.add(v)
            stack.extend(self.adj[v])

        return len(visited) == len(self.vertices)

    def __repr__(self):
        return f"Graph({self.gid}, V={len(self.vertices)}, E={len(self.edges)})"


class GraphFactory:
    """
    Small fixture graphs
    Node ids start at first_id. With sorted_adjacency=False the result is a
    MappingGraph whose neighbor lists are stored in descending order
    """

    @staticmethod
    def from_edges(edges: Iterable[Tuple[int, int]], nodes: Optional[Iterable[int]] = None,
                   labels: Optional[Dict[int, int]] = None, sorted_adjacency: bool = True) -> GraphAccess:
        edges = list(edges)
        if nodes is None:
            nodes = sorted({v for edge in edges for v in edge})
        nodes = list(nodes)
        labels = labels or {}

        if sorted_adjacency:
            g = Graph()
            for vid in nodes:
                g.add_vertex(vid, labels.get(vid, 0))
            for frm, to in edges:
                g.add_edge(frm, to)
            return g

        adjacency = defaultdict(set)
        for frm, to in edges:
            adjacency[frm].add(to)
            adjacency[to].add(frm)
        return MappingGraph({vid: sorted(adjacency[vid], reverse=True) for vid in nodes},
                            nodes=nodes, sorted_adjacency=False)

    @staticmethod
    def complete(n: int, first_id: int = 1, sorted_adjacency: bool = True) -> GraphAccess:
        nodes = range(first_id, first_id + n)
        return GraphFactory.from_edges(combinations(nodes, 2), nodes,
                                       sorted_adjacency=sorted_adjacency)

    @staticmethod
    def path(n: int, first_id: int = 1, sorted_adjacency: bool = True) -> GraphAccess:
        nodes = list(range(first_id, first_id + n))
        return GraphFactory.from_edges(zip(nodes, nodes[1:]), nodes,
                                       sorted_adjacency=sorted_adjacency)

    @staticmethod
    def cycle(n: int, first_id: int = 1, sorted_adjacency: bool = True) -> GraphAccess:
        nodes = list(range(first_id, first_id + n))
        edges = list(zip(nodes, nodes[1:]))
        if n >= 3:
            edges.append((nodes[-1], nodes[0]))
        return GraphFactory.from_edges(edges, nodes, sorted_adjacency=sorted_adjacency)

    @staticmethod
    def star(n: int, first_id: int = 1, sorted_adjacency: bool = True) -> GraphAccess:
        """Center first_id joined to n - 1 leaves"""
        nodes = list(range(first_id, first_id + n))
        return GraphFactory.from_edges([(nodes[0], leaf) for leaf in nodes[1:]], nodes,
                                       sorted_adjacency=sorted_adjacency)

    @staticmethod
    def empty(sorted_adjacency: bool = True) -> GraphAccess:
        return GraphFactory.from_edges([], [], sorted_adjacency=sorted_adjacency)


class DatasetLoader:
    """Download and parse TU Dortmund graph datasets"""

    BASE_URL = 'https://www.chrsmrrs.com/graphkerneldatasets'

    DATASETS = {
        'MUTAG': {
            'description': 'Mutagenicity prediction (188 molecular graphs)',
            'num_graphs': 188,
            'node_labels': 7,  # C, N, O, F, I, Cl, Br
        },
        'PTC_MR': {
            'description': 'Carcinogenicity in male rats (344 molecular graphs)',
            'num_graphs': 344,
            'node_labels': 18,
        }
    }

    def __init__(self, data_dir: str = './data', verbose: bool = True):
        self.data_dir = data_dir
        self.verbose = verbose
        os.makedirs(data_dir, exist_ok=True)

    def _log(self, message: str, end: str = '\n'):
        if self.verbose:
            print(message, end=end)

    def download(self, name: str) -> str:
        """Download and extract a dataset, returning its directory"""
        if name not in self.DATASETS:
            raise ValueError(f"Unknown dataset: {name}")

        zip_path = os.path.join(self.data_dir, f"{name}.zip")
        extract_path = os.path.join(self.data_dir, name)

        if os.path.exists(extract_path):
            self._log(f"✓ {name} already downloaded")
            return extract_path

        self._log(f"Downloading {name}...")
        url = f"{self.BASE_URL}/{name}.zip"

        response = requests.get(url, stream=True, timeout=30)
        response.raise_for_status()

        total_size = int(response.headers.get('content-length', 0))
        with open(zip_path, 'wb') as f:
            downloaded = 0
            for chunk in response.iter_content(chunk_size=8192):
                f.write(chunk)
                downloaded += len(chunk)
                if total_size > 0:
                    self._log(f"\rProgress: {downloaded / total_size * 100:.1f}%", end='')

        self._log("\n✓ Download complete")

        with zipfile.ZipFile(zip_path, 'r') as zip_ref:
            zip_ref.extractall(self.data_dir)
        self._log(f"✓ Extracted to {extract_path}")

        return extract_path

    def load_graphs(self, name: str, subset_size: Optional[int] = None) -> List[Graph]:
        """
        Load a dataset as a list of Graph objects

        Args:
            name: Dataset name, e.g. 'MUTAG'
            subset_size: Number of graphs to keep (None = all)
        """
        dataset_path = self.download(name)
        graphs = self.parse_dataset(os.path.join(dataset_path, name))

        if subset_size is not None and subset_size < len(graphs):
            graphs = graphs[:subset_size]
            self._log(f"Using subset of {subset_size} graphs")

        if self.verbose:
            self._print_statistics(name, graphs)

        return graphs

    def parse_dataset(self, base_path: str) -> List[Graph]:
        """Parse TU Dortmund format files sharing the prefix base_path"""

        with open(f"{base_path}_graph_indicator.txt", 'r') as f:
            graph_indicator = [int(line.strip()) for line in f if line.strip()]

        node_labels = [0] * len(graph_indicator)
        node_label_file = f"{base_path}_node_labels.txt"
        if os.path.exists(node_label_file):
            with open(node_label_file, 'r') as f:
                node_labels = [int(line.strip()) for line in f if line.strip()]

        edges = []
        with open(f"{base_path}_A.txt", 'r') as f:
            for line in f:
                if not line.strip():
                    continue
                parts = line.strip().split(',')
                edges.append((int(parts[0]), int(parts[1])))

        edge_labels = {}
        edge_label_file = f"{base_path}_edge_labels.txt"
        if os.path.exists(edge_label_file):
            with open(edge_label_file, 'r') as f:
                for i, line in enumerate(f):
                    if line.strip():
                        edge_labels[i] = int(line.strip())

        graph_labels = {}
        graph_label_file = f"{base_path}_graph_labels.txt"
        if os.path.exists(graph_label_file):
            with open(graph_label_file, 'r') as f:
                for i, line in enumerate(f, 1):
                    if line.strip():
                        graph_labels[i] = int(line.strip())

        graphs_dict: Dict[int, Graph] = {}

        for node_id, (graph_id, node_label) in enumerate(zip(graph_indicator, node_labels), 1):
            if graph_id not in graphs_dict:
                graphs_dict[graph_id] = Graph(graph_id)
                graphs_dict[graph_id].label = graph_labels.get(graph_id)
            graphs_dict[graph_id].add_vertex(node_id, node_label)

        # The A file usually lists each undirected edge in both directions
        for edge_id, (frm, to) in enumerate(edges):
            graph = graphs_dict[graph_indicator[frm - 1]]
            elabel = edge_labels.get(edge_id, 0)
            if graph.has_edge(frm, to, elabel):
                continue
            graph.add_edge(frm, to, elabel)

        graphs = [graphs_dict[gid] for gid in sorted(graphs_dict)]
        self._log(f"✓ Parsed {len(graphs)} graphs")

        return graphs

    def _print_statistics(self, dataset_name: str, graphs: List[Graph]):
        """Print dataset statistics"""

        nodes_per_graph = np.array([len(g.vertices) for g in graphs])
        edges_per_graph = np.array([len(g.edges) for g in graphs])

        all_vertex_labels = set()
        class_distribution = defaultdict(int)
        for g in graphs:
            all_vertex_labels.update(g.get_vertex_labels())
            if g.label is not None:
                class_distribution[g.label] += 1

        print(f"\n{'='*60}")
        print(f"{dataset_name} Dataset Statistics")
        print(f"{'='*60}")
        print(f"Graphs: {len(graphs)}")
        if len(graphs):
            print(f"Nodes per graph: {nodes_per_graph.mean():.1f} ± {nodes_per_graph.std():.1f}")
            print(f"  Min/Max: {nodes_per_graph.min()} / {nodes_per_graph.max()}")
            print(f"Edges per graph: {edges_per_graph.mean():.1f} ± {edges_per_graph.std():.1f}")
            print(f"  Min/Max: {edges_per_graph.min()} / {edges_per_graph.max()}")
        print(f"Unique vertex labels: {len(all_vertex_labels)}")

        if class_distribution:
            print(f"Class distribution:")
            for label, count in sorted(class_distribution.items()):
                print(f"  Class {label}: {count} graphs ({count/len(graphs)*100:.1f}%)")

        print(f"{'='*60}\n")
