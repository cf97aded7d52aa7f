"""English-like word workloads.

Two vocabularies, both taken from Faker's en_US providers and lower-cased:
WORDS_COMMON (lorem words) and WORDS_BROAD (lorem words plus first and last
names). WORDS_BROAD is bucketed by its first two letters; the clustered
generator emits runs of words from one bucket so that consecutive keys share
a prefix, which is the case a trie compresses best.
"""

import logging
import random
from collections import defaultdict

from faker.providers.lorem.en_US import Provider as LoremProvider
from faker.providers.person.en_US import Provider as PersonProvider

log = logging.getLogger(__name__)

BUCKET_WIDTH = 2
# prefix_freq=1 maps to runs averaging this many words
MAX_MEAN_RUN = 100


def _vocabulary(*sources):
  return sorted({w.lower() for src in sources for w in src if w.isalpha()})


WORDS_COMMON = _vocabulary(LoremProvider.word_list)
WORDS_BROAD = _vocabulary(LoremProvider.word_list, PersonProvider.first_names, PersonProvider.last_names)


def _bucketed(words):
  buckets = defaultdict(list)
  for w in words:
    buckets[w[:BUCKET_WIDTH]].append(w)
  return dict(buckets)


BUCKETS = _bucketed(WORDS_BROAD)


def _stay_probability(prefix_freq):
  """Chance that the next word stays in the current bucket.

  Logarithmic in prefix_freq: 0 gives runs of one word, 1 gives runs of about
  MAX_MEAN_RUN words.
  """
  if not 0.0 <= prefix_freq <= 1.0:
    raise ValueError("prefix_freq must be between 0 and 1")
  return min(1.0 - MAX_MEAN_RUN ** -prefix_freq, 0.999999)


def _check_count(num_words, limit):
  if not 1 <= num_words <= limit:
    raise ValueError(f"num_words must be between 1 and {limit}")


def generate_random_words(num_words, seed=None, unique=False):
  """`num_words` words from WORDS_COMMON, without repeats when `unique`."""
  _check_count(num_words, len(WORDS_COMMON) if unique else float("inf"))
  rng = random.Random(seed)
  if unique:
    return rng.sample(WORDS_COMMON, num_words)
  return rng.choices(WORDS_COMMON, k=num_words)


def gen_words_with_prefix_freq(num_words, prefix_freq=0.0, seed=None, unique=False):
  """`num_words` words from WORDS_BROAD, emitted in same-prefix runs.

  Each run picks a bucket (weighted by its size, or by what is left of it when
  `unique`) and a geometric run length whose continuation chance grows with
  `prefix_freq`. With `unique`, each bucket is a shuffled pool drained without
  replacement, so up to len(WORDS_BROAD) distinct words can be drawn.
  """
  stay = _stay_probability(prefix_freq)
  _check_count(num_words, len(WORDS_BROAD) if unique else float("inf"))
  rng = random.Random(seed)

  if unique:
    pools = {p: rng.sample(ws, len(ws)) for p, ws in BUCKETS.items()}
  else:
    pools = BUCKETS

  out = []
  while len(out) < num_words:
    names = list(pools)
    prefix = rng.choices(names, weights=[len(pools[p]) for p in names])[0]

    remaining = num_words - len(out)
    run = 1
    while run < remaining and rng.random() < stay:
      run += 1

    pool = pools[prefix]
    if unique:
      take = min(run, len(pool))
      out.extend(pool[-take:])
      del pool[-take:]
      if not pool:
        del pools[prefix]
    else:
      out.extend(rng.choices(pool, k=run))

  log.debug("generated %d words (stay=%.3f, unique=%s)", num_words, stay, unique)
  return out
