"""
Visualization utilities for enumerated subgraphs and enumeration runs
"""

import os
from collections import Counter
from typing import Dict, List, Sequence

import matplotlib.pyplot as plt
import numpy as np

from .graph_access import as_graph_access
from .ordering import NodeOrder


class SubgraphVisualizer:
    """Visualize subgraphs and enumeration results"""

    def __init__(self, figsize=(12, 8)):
        self.figsize = figsize
        plt.style.use('seaborn-v0_8-darkgrid' if 'seaborn-v0_8-darkgrid' in plt.style.available else 'default')

    def plot_size_distribution(self, subgraphs: List[Sequence],
                               title: str = "Subgraph Distribution"):
        """Plot subgraph sizes and the number of subgraphs rooted at each node"""

        sizes = np.array([len(s) for s in subgraphs], dtype=int)
        roots = Counter(s[0] for s in subgraphs if len(s))

        fig, axes = plt.subplots(1, 2, figsize=self.figsize)

        # Size distribution
        if sizes.size:
            counts = np.bincount(sizes)
            axes[0].bar(np.arange(len(counts))[1:], counts[1:], edgecolor='black', alpha=0.7)
        axes[0].set_xlabel('Subgraph Size (nodes)')
        axes[0].set_ylabel('Count')
        axes[0].set_title('Size Distribution')
        axes[0].grid(True, alpha=0.3)

        # Subgraphs per root (root = minimum node of each set)
        root_labels = [str(r) for r in roots]
        axes[1].bar(root_labels, list(roots.values()), color='orange', edgecolor='black', alpha=0.7)
        axes[1].set_xlabel('Root Node')
        axes[1].set_ylabel('Subgraphs')
        axes[1].set_title('Subgraphs per Root')
        axes[1].tick_params(axis='x', rotation=45)
        axes[1].grid(True, alpha=0.3, axis='y')

        plt.suptitle(title, fontsize=14, fontweight='bold')
        plt.tight_layout()

        return fig

    def plot_filter_effectiveness(self, filter_stats: List[Dict]):
        """Plot how often each filter rejected a generated subgraph"""

        names = [s['name'] for s in filter_stats]
        reject_rates = [s['reject_rate'] * 100 for s in filter_stats]
        check_counts = [s['checks'] for s in filter_stats]

        fig, axes = plt.subplots(1, 2, figsize=self.figsize)

        colors = ['red' if r > 50 else 'orange' if r > 20 else 'green'
                  for r in reject_rates]
        axes[0].barh(names, reject_rates, color=colors, alpha=0.7)
        axes[0].set_xlabel('Rejection Rate (%)')
        axes[0].set_title('Filter Selectivity')
        axes[0].grid(True, alpha=0.3, axis='x')

        axes[1].barh(names, check_counts, color='blue', alpha=0.7)
        axes[1].set_xlabel('Number of Checks')
        axes[1].set_title('Filter Usage Frequency')
        axes[1].grid(True, alpha=0.3, axis='x')

        plt.tight_layout()

        return fig

    def plot_enumeration_performance(self, stats_list: List[Dict],
                                     method_names: List[str]):
        """Compare enumeration runs (e.g. sorted vs unsorted extension)"""

        fig, axes = plt.subplots(2, 2, figsize=self.figsize)

        runtimes = [s.get('runtime', 0) for s in stats_list]
        axes[0, 0].bar(method_names, runtimes, color='skyblue', alpha=0.7, edgecolor='black')
        axes[0, 0].set_ylabel('Runtime (seconds)')
        axes[0, 0].set_title('Runtime Comparison')
        axes[0, 0].tick_params(axis='x', rotation=45)
        axes[0, 0].grid(True, alpha=0.3, axis='y')

        emitted = [s.get('subgraphs_emitted', 0) for s in stats_list]
        axes[0, 1].bar(method_names, emitted, color='lightgreen', alpha=0.7, edgecolor='black')
        axes[0, 1].set_ylabel('Subgraphs Emitted')
        axes[0, 1].set_title('Number of Subgraphs')
        axes[0, 1].tick_params(axis='x', rotation=45)
        axes[0, 1].grid(True, alpha=0.3, axis='y')

        reject_rates = [s.get('filter_rejected', 0) / max(s.get('subgraphs_generated', 0), 1) * 100
                        for s in stats_list]
        axes[1, 0].bar(method_names, reject_rates, color='coral', alpha=0.7, edgecolor='black')
        axes[1, 0].set_ylabel('Rejected (%)')
        axes[1, 0].set_title('Filter Rejection')
        axes[1, 0].tick_params(axis='x', rotation=45)
        axes[1, 0].grid(True, alpha=0.3, axis='y')

        # Speedup relative to the first run
        if runtimes and runtimes[0] > 0:
            speedups = [runtimes[0] / max(r, 0.001) for r in runtimes]
        else:
            speedups = [1.0] * len(runtimes)

        axes[1, 1].bar(method_names, speedups, color='gold', alpha=0.7, edgecolor='black')
        axes[1, 1].set_ylabel('Speedup Factor')
        axes[1, 1].set_title('Speedup vs Baseline')
        axes[1, 1].axhline(y=1, color='red', linestyle='--', label='Baseline')
        axes[1, 1].tick_params(axis='x', rotation=45)
        axes[1, 1].grid(True, alpha=0.3, axis='y')
        axes[1, 1].legend()

        plt.suptitle('Enumeration Method Comparison', fontsize=14, fontweight='bold')
        plt.tight_layout()

        return fig

    def plot_subgraph(self, graph, subgraph: Sequence, title: str = None, key=None):
        """Draw graph on a circle with the induced subgraph highlighted"""

        graph = as_graph_access(graph)
        nodes = NodeOrder(key=key).sort(graph.nodes())
        members = set(subgraph)

        angles = np.linspace(0, 2 * np.pi, len(nodes), endpoint=False)
        positions = {node: (np.cos(a), np.sin(a)) for node, a in zip(nodes, angles)}
        index = {node: i for i, node in enumerate(nodes)}

        fig, ax = plt.subplots(figsize=self.figsize)

        for node in nodes:
            for neighbor in graph.neighbors(node):
                if neighbor not in index or index[neighbor] <= index[node]:
                    continue
                induced = node in members and neighbor in members
                (x0, y0), (x1, y1) = positions[node], positions[neighbor]
                ax.plot([x0, x1], [y0, y1],
                        color='red' if induced else 'lightgray',
                        linewidth=2.5 if induced else 1.0, zorder=1)

        xs = np.array([positions[n][0] for n in nodes])
        ys = np.array([positions[n][1] for n in nodes])
        colors = ['red' if n in members else 'white' for n in nodes]
        ax.scatter(xs, ys, s=600, c=colors, edgecolors='black', zorder=2)
        for node, x, y in zip(nodes, xs, ys):
            ax.annotate(str(node), (x, y), ha='center', va='center', fontsize=10, zorder=3)

        ax.set_title(title or f"Subgraph {list(subgraph)}")
        ax.set_aspect('equal')
        ax.axis('off')

        return fig

    def save_all_plots(self, output_dir: str = './results'):
        """Save all current figures"""
        os.makedirs(output_dir, exist_ok=True)

        for i, fig_num in enumerate(plt.get_fignums()):
            fig = plt.figure(fig_num)
            fig.savefig(f'{output_dir}/figure_{i+1}.png', dpi=150, bbox_inches='tight')

        print(f"✓ Saved {len(plt.get_fignums())} figures to {output_dir}")
