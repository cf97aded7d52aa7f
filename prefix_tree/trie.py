"""
Prefix tree over arbitrary hashable symbols.

A `Trie` stores a set of symbol sequences and answers two questions about it:
was this exact sequence inserted (`search`), and does any inserted sequence
begin with this one (`starts_with`).

Layout
------
- `TrieNode` carries `__slots__` and a child dict that stays `None` until the
  node gets its first child, so leaves cost two slots and nothing else.
- A `str` is walked code point by code point. Tuples and lists of hashables
  (octets, bits, path segments) are walked the same way.
- Nothing is normalized unless the caller passes `normalize` (for instance
  `str.casefold`); by default lookups are exact.
- Every walk is a loop over the input, never recursion.

The tree only grows: there is no removal, and a node exists for a prefix iff
some inserted word starts with it. The root always exists and stands for the
empty prefix; it is terminal only once an empty word has been inserted.
"""

import logging
from dataclasses import dataclass

log = logging.getLogger(__name__)


class TrieNode:
  __slots__ = ("children", "is_terminal")

  def __init__(self):
    self.children = None
    self.is_terminal = False

  def child(self, symbol):
    """Existing child for `symbol`, or None."""
    kids = self.children
    return None if kids is None else kids.get(symbol)

  def add_child(self, symbol):
    """Child for `symbol`, created on demand. Returns (child, created)."""
    kids = self.children
    if kids is None:
      kids = self.children = {}
    else:
      node = kids.get(symbol)
      if node is not None:
        return node, False
    node = kids[symbol] = TrieNode()
    return node, True


@dataclass(frozen=True)
class TrieStats:
  nodes: int      # root included
  words: int      # terminal nodes
  internal: int   # nodes with at least one child
  max_depth: int  # longest stored path, in symbols

  @property
  def edges(self):
    return self.nodes - 1

  @property
  def avg_branch_factor(self):
    """Mean out-degree of internal nodes (0.0 for an empty trie)."""
    return self.edges / self.internal if self.internal else 0.0


class Trie:
  __slots__ = ("root", )

  def __init__(self):
    self.root = TrieNode()

  def __contains__(self, word):
    return self.search(word)

  def insert(self, word, normalize=None):
    """Add `word`; afterwards `search(word)` is True.

    Missing nodes along the path are created, then the last one is marked
    terminal. Re-inserting a word changes nothing. O(len(word)).
    """
    if normalize is not None:
      word = normalize(word)
    node = self.root
    for symbol in word:
      node = node.add_child(symbol)[0]
    node.is_terminal = True

  def _prepare_batch(self, words, normalize=None, dedup=True, presorted=False):
    """Words of a batch in sorted order, normalized and optionally deduplicated.

    Sorting keeps words with a shared prefix adjacent, which is what lets
    `batch_insert` resume from the previous word's path. Duplicates are
    dropped by comparing neighbours after the sort, so words only need to be
    orderable, not hashable. `presorted=True` skips the sort; the input must
    then already be ordered under the same `normalize`.
    """
    if normalize is not None:
      words = map(normalize, words)
    ordered = list(words) if presorted else sorted(words)
    if not dedup or not ordered:
      return ordered
    kept = [ordered[0]]
    for w in ordered[1:]:
      if w != kept[-1]:
        kept.append(w)
    return kept

  def batch_insert(self, words, *, normalize=None, dedup=True, presorted=False):
    """Insert many words, walking each shared prefix once.

    The batch is sorted first (see `_prepare_batch`). The path of the previous
    word is kept on a stack; each new word pops back to the longest prefix it
    shares with its predecessor and extends from there. The resulting trie is
    the same as inserting the words one at a time.

    Returns the number of nodes created.
    """
    batch = self._prepare_batch(words, normalize, dedup, presorted)

    path = [self.root]
    prev = ()
    created = 0
    for word in batch:
      shared = 0
      limit = min(len(prev), len(word))
      while shared < limit and prev[shared] == word[shared]:
        shared += 1
      del path[shared + 1:]

      node = path[-1]
      for symbol in word[shared:]:
        node, new = node.add_child(symbol)
        created += new
        path.append(node)
      node.is_terminal = True
      prev = word

    log.debug("batch_insert: %d words, %d new nodes", len(batch), created)
    return created

  def prefix_search(self, prefix, normalize=None):
    """Node reached by consuming all of `prefix`, or None if the path breaks.

    The empty prefix yields the root.
    """
    if normalize is not None:
      prefix = normalize(prefix)
    node = self.root
    for symbol in prefix:
      node = node.child(symbol)
      if node is None:
        break
    return node

  def search(self, word, normalize=None):
    """True iff `word` itself was inserted."""
    node = self.prefix_search(word, normalize)
    return node is not None and node.is_terminal

  def starts_with(self, prefix, normalize=None):
    """True iff some inserted word begins with `prefix` (always True for "")."""
    return self.prefix_search(prefix, normalize) is not None

  def stats(self):
    """Structural summary gathered in a single walk over the tree."""
    nodes = words = internal = max_depth = 0
    pending = [(self.root, 0)]
    while pending:
      node, depth = pending.pop()
      nodes += 1
      words += node.is_terminal
      if depth > max_depth:
        max_depth = depth
      if node.children:
        internal += 1
        pending.extend((kid, depth + 1) for kid in node.children.values())
    return TrieStats(nodes, words, internal, max_depth)
