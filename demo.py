"""
Ordered Trees Demo -- Depth growth, rebalance cost, and fail-fast iteration.

Generates:
- viz/*.png -- Individual visualization files
- report.pdf -- Summary PDF report
"""

import sys
import time
from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

sys.path.insert(0, str(Path(__file__).parent / "src"))

from avl_tree import AVLTree
from binary_search_tree import BinarySearchTree
from tree_errors import ConcurrentModificationError

SEED = 42
SIZES = [25, 50, 100, 200, 400, 800]

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)


def build(tree_class, values):
    tree = tree_class()
    start = time.perf_counter()
    for v in values:
        tree.insert(int(v))
    elapsed = time.perf_counter() - start
    return tree, elapsed


def example_1_iteration_round_trip():
    """Iterate, remove one value mid-traversal, and trip the fail-fast check."""
    print("=" * 60)
    print("Example 1: Iteration with removal")
    print("=" * 60)

    tree = AVLTree()
    for v in [6, 3, 1, 2, 5, 4, 9, 7, 8]:
        tree.insert(v)
    print(f"Tree:           {tree!r}")

    it = tree.iterator()
    produced = []
    for value in it:
        produced.append(value)
        if value == 6:
            it.remove_last()
    print(f"Produced:       {produced}")
    print(f"After removal:  {list(tree)}  contains(6) = {tree.contains(6)}")

    stale = tree.iterator()
    tree.insert(10)
    try:
        next(stale)
    except ConcurrentModificationError as exc:
        print(f"Stale iterator: {type(exc).__name__}: {exc}")


def example_2_depth_growth():
    """Depth of plain vs AVL trees for ascending and shuffled input."""
    print("\n" + "=" * 60)
    print("Example 2: Depth growth")
    print("=" * 60)

    rng = np.random.default_rng(SEED)
    rows = {"bst_sorted": [], "avl_sorted": [], "bst_shuffled": [], "avl_shuffled": []}
    for n in SIZES:
        ascending = np.arange(1, n + 1)
        shuffled = rng.permutation(ascending)
        rows["bst_sorted"].append(build(BinarySearchTree, ascending)[0].depth())
        rows["avl_sorted"].append(build(AVLTree, ascending)[0].depth())
        rows["bst_shuffled"].append(build(BinarySearchTree, shuffled)[0].depth())
        rows["avl_shuffled"].append(build(AVLTree, shuffled)[0].depth())
        print(f"n={n:>4}  bst sorted={rows['bst_sorted'][-1]:>4}  avl sorted={rows['avl_sorted'][-1]:>3}  "
              f"bst shuffled={rows['bst_shuffled'][-1]:>3}  avl shuffled={rows['avl_shuffled'][-1]:>3}")

    sizes = np.array(SIZES)
    bound = 1.44 * np.log2(sizes + 2)

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.plot(sizes, rows["bst_sorted"], "o-", color="crimson", label="BST, ascending input")
    ax.plot(sizes, rows["bst_shuffled"], "s--", color="salmon", label="BST, shuffled input")
    ax.plot(sizes, rows["avl_sorted"], "o-", color="steelblue", label="AVL, ascending input")
    ax.plot(sizes, rows["avl_shuffled"], "s--", color="skyblue", label="AVL, shuffled input")
    ax.plot(sizes, bound, "k:", label="1.44 log2(n + 2)")
    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.set_xlabel("Number of values (n)")
    ax.set_ylabel("depth()")
    ax.set_title("Tree Depth vs Size")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    img_path = VIZ_DIR / "01_depth_growth.png"
    fig.savefig(img_path, dpi=150)
    plt.close(fig)

    return img_path


def example_3_insert_cost():
    """Build time: balance checks measure subtree depth on every insertion."""
    print("\n" + "=" * 60)
    print("Example 3: Insertion cost")
    print("=" * 60)

    bst_times, avl_times = [], []
    for n in SIZES:
        ascending = np.arange(1, n + 1)
        bst_times.append(build(BinarySearchTree, ascending)[1])
        avl_times.append(build(AVLTree, ascending)[1])
        print(f"n={n:>4}  bst={bst_times[-1] * 1e3:8.2f} ms  avl={avl_times[-1] * 1e3:8.2f} ms")

    sizes = np.array(SIZES)
    slope_bst = np.polyfit(np.log(sizes), np.log(bst_times), 1)[0]
    slope_avl = np.polyfit(np.log(sizes), np.log(avl_times), 1)[0]
    print(f"Empirical exponent: bst ~ n^{slope_bst:.2f}, avl ~ n^{slope_avl:.2f}")

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.plot(sizes, np.array(bst_times) * 1e3, "o-", color="crimson", label=f"BST (~n^{slope_bst:.2f})")
    ax.plot(sizes, np.array(avl_times) * 1e3, "o-", color="steelblue", label=f"AVL (~n^{slope_avl:.2f})")
    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.set_xlabel("Number of values (n)")
    ax.set_ylabel("Total build time (ms)")
    ax.set_title("Ascending Insertion Cost")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    img_path = VIZ_DIR / "02_insert_cost.png"
    fig.savefig(img_path, dpi=150)
    plt.close(fig)

    return img_path


def generate_pdf_report(figures_data):
    """Generate the summary PDF from the saved visualizations."""
    print("\n" + "=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    pdf_path = VIZ_DIR.parent / "report.pdf"

    with PdfPages(pdf_path) as pdf:
        fig = plt.figure(figsize=(11, 8.5))
        fig.text(0.5, 0.6, "Ordered Trees", fontsize=36, ha="center", fontweight="bold")
        fig.text(0.5, 0.5, "Plain vs AVL Binary Search Trees", fontsize=24, ha="center")
        fig.text(0.5, 0.2, f"Seed: {SEED}", fontsize=12, ha="center", color="gray")
        pdf.savefig(fig)
        plt.close(fig)

        fig = plt.figure(figsize=(11, 8.5))
        fig.text(0.5, 0.95, "Summary", fontsize=24, ha="center", fontweight="bold")
        summary_text = """
An AVL tree keeps depth within 1.44 log2(n + 2) for any insertion order,
while a plain binary search tree degenerates to a list on sorted input.

Balance factors are computed by measuring subtree depth on demand,
so each insertion pays for the subtrees it inspects on the way up.
"""
        fig.text(0.1, 0.85, summary_text, fontsize=12, ha="left", va="top",
                 fontfamily="monospace", linespacing=1.5)
        pdf.savefig(fig)
        plt.close(fig)

        for title, img_path in figures_data:
            page = plt.figure(figsize=(11, 8.5))
            page.text(0.5, 0.98, title, fontsize=14, ha="center", fontweight="bold")
            ax = page.add_axes([0.05, 0.05, 0.9, 0.88])
            ax.imshow(plt.imread(img_path))
            ax.axis("off")
            pdf.savefig(page)
            plt.close(page)

    print(f"PDF report saved to: {pdf_path}")
    return pdf_path


def main():
    print(f"\nRandom seed: {SEED}")
    print(f"Output directory: {VIZ_DIR}")

    example_1_iteration_round_trip()
    figures = [
        ("Example 2: Depth Growth", example_2_depth_growth()),
        ("Example 3: Insertion Cost", example_3_insert_cost()),
    ]
    generate_pdf_report(figures)


if __name__ == "__main__":
    main()
