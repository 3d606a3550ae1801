"""
Complete Experiment Suite
Regression fixtures, sorted vs unsorted extension comparison on random graphs,
and an optional motif census on the MUTAG molecules
"""

import os
import time
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import requests

from subgraph_enum.enumeration import ConnectedSubgraphEnumerator
from subgraph_enum.filters import MotifFilters
from subgraph_enum.graph_access import AdjacencyMatrixGraph, MappingGraph
from subgraph_enum.graph_loader import DatasetLoader, GraphFactory
from subgraph_enum.visualization import SubgraphVisualizer

# Known counts of connected induced subgraphs per size bound (None = unbounded)
EXPECTED_COUNTS = {
    'clique': {None: 31, 0: 0, 1: 5, 2: 15, 3: 25, 4: 30},
    'cycle': {None: 21, 0: 0, 1: 5, 2: 10, 3: 15, 4: 20},
    'path': {None: 15, 0: 0, 1: 5, 2: 9, 3: 12, 4: 14},
    'disconnected': {None: 10, 0: 0, 1: 5, 2: 9, 3: 10, 4: 10},
    'empty': {None: 0, 0: 0, 1: 0, 2: 0, 3: 0, 4: 0},
}


def fixture_graph(name: str, sorted_adjacency: bool):
    """Five-node fixture graphs with ids 1..5"""
    if name == 'clique':
        return GraphFactory.complete(5, sorted_adjacency=sorted_adjacency)
    if name == 'cycle':
        return GraphFactory.cycle(5, sorted_adjacency=sorted_adjacency)
    if name == 'path':
        return GraphFactory.path(5, sorted_adjacency=sorted_adjacency)
    if name == 'disconnected':
        return GraphFactory.from_edges([(1, 2), (3, 4), (4, 5), (3, 5)],
                                       sorted_adjacency=sorted_adjacency)
    if name == 'empty':
        return GraphFactory.empty(sorted_adjacency=sorted_adjacency)
    raise ValueError(f"Unknown fixture: {name}")


def random_graph_pair(num_nodes: int, edge_probability: float, seed: int):
    """
    Same random graph twice: sorted adjacency matrix and a MappingGraph whose
    neighbor lists are shuffled
    """
    rng = np.random.default_rng(seed)
    upper = np.triu(rng.random((num_nodes, num_nodes)) < edge_probability, k=1)
    matrix_graph = AdjacencyMatrixGraph(upper | upper.T)

    adjacency = {}
    for node in matrix_graph.nodes():
        neighbors = np.array(matrix_graph.neighbors(node), dtype=int)
        adjacency[node] = rng.permutation(neighbors).tolist()
    return matrix_graph, MappingGraph(adjacency, sorted_adjacency=False)


def run_fixture_suite() -> pd.DataFrame:
    """Check every fixture and bound on both extension paths"""

    rows = []
    for name, expected in EXPECTED_COUNTS.items():
        for bound, expected_count in expected.items():
            sorted_enum = ConnectedSubgraphEnumerator(fixture_graph(name, True), max_size=bound)
            unsorted_enum = ConnectedSubgraphEnumerator(fixture_graph(name, False), max_size=bound)
            sorted_result = sorted_enum.run()
            unsorted_result = unsorted_enum.run()

            status = 'OK'
            if len(sorted_result) != expected_count:
                status = 'COUNT MISMATCH'
            elif sorted_result != unsorted_result:
                status = 'PATH MISMATCH'

            rows.append({
                'Fixture': name,
                'Bound': 'inf' if bound is None else bound,
                'Expected': expected_count,
                'Sorted Path': len(sorted_result),
                'Unsorted Path': len(unsorted_result),
                'Status': status
            })

    return pd.DataFrame(rows)


def run_scaling_suite(sizes: List[int], edge_probability: float = 0.3,
                      max_size: int = 5, seed: int = 7) -> Tuple[pd.DataFrame, List[Dict], List[str]]:
    """Runtime of both extension paths on random graphs of growing size"""

    rows = []
    stats_list = []
    method_names = []

    for num_nodes in sizes:
        matrix_graph, shuffled_graph = random_graph_pair(num_nodes, edge_probability, seed)

        for label, graph in (('sorted', matrix_graph), ('unsorted', shuffled_graph)):
            enumerator = ConnectedSubgraphEnumerator(graph, max_size=max_size)
            result = enumerator.run()
            stats_list.append(enumerator.stats)
            method_names.append(f"{label} n={num_nodes}")

            rows.append({
                'Nodes': num_nodes,
                'Path': label,
                'Subgraphs': len(result),
                'Extensions': enumerator.stats['extensions'],
                'Runtime (s)': enumerator.stats['runtime']
            })

    return pd.DataFrame(rows), stats_list, method_names


def run_motif_census(dataset_size: int = 20, max_size: int = 6) -> pd.DataFrame:
    """Count connected fragments, induced paths and induced cycles per molecule"""

    loader = DatasetLoader(verbose=True)
    graphs = loader.load_graphs('MUTAG', subset_size=dataset_size)

    rows = []
    for graph in graphs:
        start = time.time()
        fragments = ConnectedSubgraphEnumerator(graph, max_size=max_size).run()
        paths = ConnectedSubgraphEnumerator(graph, max_size=max_size,
                                            subgraph_filter=MotifFilters.paths(graph, min_size=3)).run()
        cycles = ConnectedSubgraphEnumerator(graph, max_size=max_size,
                                             subgraph_filter=MotifFilters.cycles(graph)).run()
        rows.append({
            'Graph': graph.gid,
            'Class': graph.label,
            'Atoms': len(graph.vertices),
            'Fragments': len(fragments),
            'Induced Paths': len(paths),
            'Induced Cycles': len(cycles),
            'Runtime (s)': time.time() - start
        })

    return pd.DataFrame(rows)


def run_all_experiments(save_results: bool = True, include_datasets: bool = False,
                        scaling_sizes: Optional[List[int]] = None):
    """
    Run all experiments and summarize them

    Args:
        save_results: Whether to write CSV tables and figures to results/
        include_datasets: Also download MUTAG and run the motif census
        scaling_sizes: Node counts for the random-graph comparison
    """

    print("="*80)
    print(" "*20 + "CONNECTED SUBGRAPH EXPERIMENT SUITE")
    print("="*80)

    if save_results:
        os.makedirs('results', exist_ok=True)

    # ========================================================================
    # EXPERIMENT 1: Regression fixtures
    # ========================================================================
    print("\n" + "="*80)
    print(" "*20 + "EXPERIMENT 1: REGRESSION FIXTURES")
    print("="*80)

    fixture_df = run_fixture_suite()
    print("\n" + fixture_df.to_string(index=False))

    failures = fixture_df[fixture_df['Status'] != 'OK']
    if len(failures) == 0:
        print(f"\n✓ All {len(fixture_df)} fixture checks passed")
    else:
        print(f"\n✗ {len(failures)} fixture checks failed")

    # ========================================================================
    # EXPERIMENT 2: Sorted vs unsorted extension
    # ========================================================================
    print("\n" + "="*80)
    print(" "*20 + "EXPERIMENT 2: SORTED VS UNSORTED EXTENSION")
    print("="*80)

    scaling_df, stats_list, method_names = run_scaling_suite(scaling_sizes or [10, 20, 30])
    print("\n" + scaling_df.to_string(index=False))

    pivot = scaling_df.pivot(index='Nodes', columns='Path', values='Runtime (s)')
    pivot['Speedup'] = pivot['unsorted'] / pivot['sorted'].clip(lower=1e-6)
    print("\nRuntime by extension path:")
    print(pivot.to_string())

    # ========================================================================
    # EXPERIMENT 3: Motif census on MUTAG
    # ========================================================================
    census_df = None
    if include_datasets:
        print("\n" + "="*80)
        print(" "*20 + "EXPERIMENT 3: MUTAG MOTIF CENSUS")
        print("="*80)

        try:
            census_df = run_motif_census()
            print("\n" + census_df.to_string(index=False))
            print("\nMean counts by class:")
            print(census_df.groupby('Class')[['Fragments', 'Induced Paths', 'Induced Cycles']].mean().to_string())
        except (requests.RequestException, OSError) as e:
            print(f"✗ Motif census skipped, dataset unavailable: {e}")

    # ========================================================================
    # SAVE RESULTS
    # ========================================================================
    if save_results:
        print("\n" + "="*80)
        print("SAVING RESULTS")
        print("="*80)

        fixture_df.to_csv('results/fixture_results.csv', index=False)
        scaling_df.to_csv('results/scaling_results.csv', index=False)
        print("\n✓ Saved tables to 'results/'")
        if census_df is not None:
            census_df.to_csv('results/motif_census.csv', index=False)
            print("✓ Saved motif census to 'results/motif_census.csv'")

        visualizer = SubgraphVisualizer()
        fig = visualizer.plot_enumeration_performance(stats_list, method_names)
        fig.savefig('results/method_comparison.png', dpi=150, bbox_inches='tight')
        print("✓ Saved comparison chart to 'results/method_comparison.png'")

        plt.close('all')

    print("\n" + "="*80)
    print("EXPERIMENTS COMPLETE")
    print("="*80 + "\n")

    return fixture_df, scaling_df, census_df


def main():
    """Main execution"""
    run_all_experiments(save_results=True, include_datasets=False)


if __name__ == "__main__":
    main()
