"""
Basic Connected Subgraph Enumeration
Enumerates all connected induced subgraphs of a small "kite" graph,
then only the induced paths, and saves a few figures
"""

import os
from typing import List

from subgraph_enum.enumeration import ConnectedSubgraphEnumerator
from subgraph_enum.filters import MotifFilters
from subgraph_enum.graph_access import MappingGraph
from subgraph_enum.visualization import SubgraphVisualizer

KITE_DRAWING = """
    0
     \\
      1--4
     / \\
    2---3
"""


def kite_graph() -> MappingGraph:
    adjacency = {0: [1], 1: [0, 2, 3, 4], 2: [1, 3], 3: [1, 2], 4: [1]}
    return MappingGraph(adjacency, sorted_adjacency=True)


def format_sets(subgraphs: List[List]) -> str:
    return "\n".join("{" + ", ".join(str(n) for n in s) + "}" for s in subgraphs)


def main():
    """Run the kite example"""

    print(f"\n{'='*70}")
    print(f"{'CONNECTED SUBGRAPHS OF THE KITE GRAPH':^70}")
    print(f"{'='*70}")
    print(KITE_DRAWING)

    graph = kite_graph()

    enumerator = ConnectedSubgraphEnumerator(graph, verbose=True)
    subgraphs = enumerator.run()

    print("Node sets of all connected induced subgraphs are\n")
    print(format_sets(subgraphs))

    path_filter = MotifFilters.paths(graph)
    path_enumerator = ConnectedSubgraphEnumerator(graph, subgraph_filter=path_filter, verbose=True)
    paths = path_enumerator.run()

    print("Node sets of all induced paths are\n")
    print(format_sets(paths))

    # Visualize results
    print("\nGenerating visualizations...")
    visualizer = SubgraphVisualizer()

    visualizer.plot_size_distribution(subgraphs, title="Kite Graph Subgraph Distribution")
    visualizer.plot_filter_effectiveness(path_filter.get_all_stats())
    longest = max(paths, key=len)
    visualizer.plot_subgraph(graph, longest, title=f"Longest induced path {longest}")

    os.makedirs('results', exist_ok=True)
    visualizer.save_all_plots('results')

    with open('results/kite_subgraphs.txt', 'w') as f:
        f.write("Kite graph - connected induced subgraphs\n")
        f.write("="*70 + "\n\n")
        f.write(f"Total subgraphs: {len(subgraphs)}\n")
        f.write(f"Induced paths: {len(paths)}\n\n")
        f.write(format_sets(subgraphs))
        f.write("\n")

    print(f"\n✓ Results saved to 'results/' directory")
    print(f"{'='*70}\n")


if __name__ == "__main__":
    main()
