"""prefix_tree: a prefix tree (trie) with workload generators and a benchmark harness."""

import logging

from prefix_tree.trie import Trie, TrieNode, TrieStats

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Trie",
    "TrieNode",
    "TrieStats",
]
