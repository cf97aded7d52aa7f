"""
Benchmark harness: time the trie's operations over a generated workload.

Each repeat builds fresh tries, so repeats are independent samples. Results
come back as a long-format `pandas.DataFrame` with one row per
(operation, repeat):

    operation, repeat, n, seconds, ns_per_op, hits

`hits` counts True answers for queries and nodes created for insertions.
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from prefix_tree.trie import Trie
from prefix_tree.workloads import IPConfig, IPGenerator, WorkLoad
from prefix_tree.workloads.ip_generator import ip_to_bits

log = logging.getLogger(__name__)

WORKLOADS = ("words", "urls", "ips")
OPERATIONS = ("insert", "batch_insert", "search", "starts_with")

# Never produced by any generator, so appending it guarantees a miss
MISS_SUFFIX = "\x00"


@dataclass
class BenchConfig:
  """
  Configuration for run_benchmark
      workload: str, one of WORKLOADS
      size: int, number of keys inserted
      seed: int, seed for workload and query sampling
      prefix_freq: float, prefix clustering for the words workload (0..1)
      hit_share: float, fraction of queries drawn from the inserted keys
      repeats: int, independent timing runs
  """
  workload: str = "words"
  size: int = 10_000
  seed: Optional[int] = 0
  prefix_freq: float = 0.0
  hit_share: float = 0.5
  repeats: int = 3

  def __post_init__(self):
    if self.workload not in WORKLOADS:
      raise ValueError(f"workload must be one of {WORKLOADS}, got {self.workload!r}")
    if self.size < 1:
      raise ValueError("size must be positive")
    if not 0.0 <= self.prefix_freq <= 1.0:
      raise ValueError("prefix_freq must be between 0 and 1")
    if not 0.0 <= self.hit_share <= 1.0:
      raise ValueError("hit_share must be between 0 and 1")
    if self.repeats < 1:
      raise ValueError("repeats must be positive")


def build_workload(config):
  """Return (keys, queries, prefixes) for `config`.

  queries mix inserted keys (`hit_share` of them) with guaranteed misses.
  prefixes are the leading halves of those queries for text workloads; for the
  ips workload they are subnet bit prefixes around inserted hosts.
  """
  rng = random.Random(config.seed)
  n = config.size

  if config.workload == "words":
    keys = WorkLoad(config.seed).words(n, p_freq=config.prefix_freq)
  elif config.workload == "urls":
    keys = WorkLoad(config.seed).urls(n)
  else:
    gen = IPGenerator(IPConfig(seed=config.seed))
    hosts = gen.batch(n)
    keys = [ip_to_bits(ip) for ip in hosts]

  n_hit = round(n * config.hit_share)
  hits = [rng.choice(keys) for _ in range(n_hit)]
  misses = [rng.choice(keys) + MISS_SUFFIX for _ in range(n - n_hit)]

  if config.workload == "ips":
    prefixes = gen.subnets(n_hit, hosts=hosts, as_bits=True) if n_hit else []
  else:
    prefixes = [h[:max(1, len(h) // 2)] for h in hits]
  prefixes += misses

  queries = hits + misses
  rng.shuffle(queries)
  rng.shuffle(prefixes)
  return keys, queries, prefixes


def trie_stats(trie):
  """Structural stats of `trie` as a plain dict (one walk over the tree)."""
  s = trie.stats()
  return {
    "nodes": s.nodes,
    "words": s.words,
    "max_depth": s.max_depth,
    "avg_branch_factor": s.avg_branch_factor,
  }


def _timed(fn, items):
  start = time.perf_counter()
  out = fn(items)
  return time.perf_counter() - start, out


def _insert_each(trie):
  def run(keys):
    insert = trie.insert
    for k in keys:
      insert(k)
  return run


def _count_true(fn):
  def run(items):
    return sum(1 for x in items if fn(x))
  return run


def _row(op, rep, n, seconds, hits):
  return {
    "operation": op,
    "repeat": rep,
    "n": n,
    "seconds": seconds,
    "ns_per_op": seconds * 1e9 / n if n else 0.0,
    "hits": hits,
  }


def run_benchmark(config):
  """Time every operation in OPERATIONS `config.repeats` times.

  The returned frame carries `attrs["stats"]`, the structural stats of the
  last trie built (see `trie_stats`).
  """
  keys, queries, prefixes = build_workload(config)
  log.info("benchmark: workload=%s size=%d repeats=%d", config.workload, config.size, config.repeats)

  rows = []
  trie = None
  for rep in range(config.repeats):
    trie = Trie()
    seconds, _ = _timed(_insert_each(trie), keys)
    rows.append(_row("insert", rep, len(keys), seconds, trie.stats().edges))

    seconds, created = _timed(Trie().batch_insert, keys)
    rows.append(_row("batch_insert", rep, len(keys), seconds, created))

    seconds, found = _timed(_count_true(trie.search), queries)
    rows.append(_row("search", rep, len(queries), seconds, found))

    seconds, found = _timed(_count_true(trie.starts_with), prefixes)
    rows.append(_row("starts_with", rep, len(prefixes), seconds, found))

  df = pd.DataFrame(rows, columns=["operation", "repeat", "n", "seconds", "ns_per_op", "hits"])
  df.attrs["stats"] = trie_stats(trie)
  log.info("benchmark done: %d nodes", df.attrs["stats"]["nodes"])
  return df


def summarize(df):
  """Per-operation mean / median / p95 of ns_per_op, in OPERATIONS order."""
  g = df.groupby("operation")["ns_per_op"]
  out = pd.DataFrame({
    "mean": g.mean(),
    "median": g.median(),
    "p95": g.agg(lambda s: np.percentile(s.to_numpy(), 95)),
  })
  out.index.name = "operation"
  order = [op for op in OPERATIONS if op in out.index]
  return out.loc[order].reset_index()
