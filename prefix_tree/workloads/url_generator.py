"""URL workloads: long keys that share scheme/host prefixes heavily.

Hosts are drawn Zipf-weighted, either from the Tranco top-sites list
(`URLConfig(use_tranco=True)`, fetched and cached on first use) or from a
seeded pool of Faker domain names.
"""

import logging
import os
import random
import string
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from faker import Faker
from tranco import Tranco

from prefix_tree.workloads.en_word_generator import WORDS_BROAD, WORDS_COMMON

log = logging.getLogger(__name__)

# Per-user cache; never inside the installed package
domain_cache_path = os.path.join(os.path.expanduser("~"), ".cache", "prefix_tree", "tranco")


## === Config Class === ##

@dataclass
class URLConfig:
  """
  Configuration for generate_urls
      https_share: float, fraction of https (vs. http) schemes
      slug_p: float, probability a path segment is a random slug (vs. a word)
      num_domains: int, size of the host pool
      zipf_s: float, Zipf exponent for host popularity
      use_tranco: bool, draw hosts from the Tranco list instead of Faker
      cache_dir: str, Tranco cache directory
  """
  https_share: float = 0.88
  slug_p: float = 0.3
  num_domains: int = 1_000
  zipf_s: float = 1.1
  use_tranco: bool = False
  cache_dir: Optional[str] = None

  def __post_init__(self):
    if not 0.0 <= self.https_share <= 1.0:
      raise ValueError("https_share must be between 0 and 1")
    if not 0.0 <= self.slug_p <= 1.0:
      raise ValueError("slug_p must be between 0 and 1")
    if self.num_domains <= 0 or self.num_domains > 1_000_000:
      raise ValueError("num_domains must be between 1 and 1,000,000")
    if self.zipf_s <= 0:
      raise ValueError("zipf_s must be positive")
    if self.cache_dir is None:
      self.cache_dir = domain_cache_path


### ================= URL Generation Probability Config ================= ###

# --- File extensions and their weights for path endings --- #
file_paths = [
  # Code / markup
  "js","mjs","css","html","htm",
  # Images
  "jpg","jpeg","png","gif","webp","svg","ico",
  # Fonts
  "woff2","woff","ttf","otf","eot",
  # Docs / data
  "pdf","json","xml","txt","csv",
  # Media
  "mp4","webm","mov","mp3","ogg",
]

file_path_weights = [
  0.283058, 0.010266, 0.095455, 0.029750, 0.004057,
  0.103223, 0.025806, 0.090288, 0.050907, 0.028495, 0.015048, 0.005123,
  0.080540, 0.009943, 0.003977, 0.002983, 0.001989,
  0.029830, 0.029830, 0.009943, 0.011932, 0.007955,
  0.034801, 0.014915, 0.004972, 0.009943, 0.004972,
]

slug_separators = ["-", "_", " "]
slug_separator_weights = [0.82, 0.12, 0.06]

sub_segments = [1, 2, 3, 4, 5, 6, 7, 8]
sub_segment_weights = [0.30, 0.23, 0.18, 0.12, 0.08, 0.05, 0.03, 0.01]

depths, depth_weights = zip(*[
  (0, 0.20), (1, 0.30), (2, 0.25), (3, 0.13), (4, 0.10), (5, 0.02)
])

param_keys = ["q","id","page","ref","utm_source","utm_medium","utm_campaign",
  "utm_term","utm_content","lang","session","token","fbclid"]
param_weights = [0.15, 0.13, 0.13, 0.10, 0.06, 0.06, 0.05, 0.03,
  0.03, 0.06, 0.10, 0.05, 0.05]

num_params, num_params_weights = zip(*[
  (0, 0.40), (1, 0.35), (2, 0.11), (3, 0.09), (4, 0.03), (5, 0.015), (6, 0.005), (7, 0.002)
])

languages = ["en","en-us","es","fr","de","pt-br","it","ja","zh-cn","ru","nl"]


### ================= Host Pools ================= ###

def zipf_weights(n, s):
  return [1 / ((r + 1) ** s) for r in range(n)]


def load_domains(config, seed=None):
  """Return (domains, zipf_weights) for the configured host pool."""
  n = config.num_domains
  if config.use_tranco:
    t = Tranco(cache=True, cache_dir=config.cache_dir)
    try:
      latest_list = t.list(subdomains=True)
    except TypeError:
      latest_list = t.list()
    domains = latest_list.top(n)
    log.info("loaded %d domains from Tranco", len(domains))
  else:
    fake = Faker()
    fake.seed_instance(seed)
    domains = list(dict.fromkeys(fake.domain_name(levels=1) for _ in range(n)))
  return domains, zipf_weights(len(domains), config.zipf_s)


def sample_host(domains, weights, rng):
  """Choose a host domain, Zipf-weighted by rank."""
  return rng.choices(domains, weights=weights, k=1)[0]


def pick_scheme(rng, https_share):
  return "https" if rng.random() < https_share else "http"


## ----- Path Generation ----- ##

def slug(rng, min_len=2, max_len=12, digit_p=0.15, sep_p=0.15):
  pool = string.ascii_lowercase + (string.digits if rng.random() < digit_p else "")
  s = "".join(rng.choices(pool, k=rng.randint(min_len, max_len)))
  if rng.random() < sep_p and len(s) > 3:
    indx = rng.randint(2, len(s) - 2)
    separator = rng.choices(slug_separators, slug_separator_weights, k=1)[0]
    s = s[:indx] + separator + s[indx:]
  return quote(s, safe='-_.~')


def segment(rng, slug_p):
  """Yield the parts of a single path segment."""
  num_segs = rng.choices(sub_segments, weights=sub_segment_weights, k=1)[0]
  for i in range(num_segs):
    if rng.random() < slug_p:
      yield slug(rng)
    else:
      yield quote(rng.choice(WORDS_BROAD), safe='-_.~')
    if i < num_segs - 1:
      yield rng.choices(slug_separators[:2], weights=slug_separator_weights[:2], k=1)[0]


def gen_path(rng, slug_p=0.3):
  """Generate a random path of depth 0..5; deeper segments lean towards slugs."""
  if slug_p < 0 or slug_p > 1:
    raise ValueError("slug_p must be between 0 and 1")

  depth = rng.choices(depths, weights=depth_weights, k=1)[0]
  if depth == 0:
    return "/"

  segs = []
  for _ in range(depth):
    segs.append("".join(segment(rng, slug_p)))
    slug_p += ((1 - slug_p) * 0.15)

  path = "/" + "/".join(segs)
  if rng.random() < 0.3:
    return path + '.' + rng.choices(file_paths, weights=file_path_weights, k=1)[0]
  return path + '/'


## ----- Query Strings ----- ##

def _words_value(rng, num_words):
  space_sym = "%20" if rng.random() < 0.2 else "+"
  return space_sym.join(rng.choices(WORDS_COMMON, k=num_words))


def param_pair(rng, seen):
  """Generate a single key=value pair whose key is not in `seen`."""
  new_keys, new_weights = zip(*[kw for kw in zip(param_keys, param_weights) if kw[0] not in seen])
  key = rng.choices(new_keys, weights=new_weights, k=1)[0]
  seen.add(key)

  if key == 'q':
    num_words = rng.choices([1, 2, 3, 4, 5, 6, 8, 12],
                            weights=[0.25, 0.25, 0.2, 0.12, 0.08, 0.05, 0.03, 0.02], k=1)[0]
    val = _words_value(rng, num_words)
  elif key in ('id', 'page'):
    val = str(rng.randint(1, 10**7 if key == 'id' else 50))
  elif key in ('fbclid', 'ref', 'token', 'session'):
    if rng.random() < 0.6:
      nbytes = rng.choice([8, 12, 16, 24, 32])
      val = format(rng.getrandbits(8 * nbytes), f"0{2 * nbytes}x")
    else:
      val = slug(rng, min_len=16, max_len=48, digit_p=0.33, sep_p=0.0)
  elif key == "lang":
    val = rng.choice(languages)
  else:
    val = _words_value(rng, rng.randint(1, 3))
  return key + '=' + val


def query_string(rng):
  """Generate a query string (possibly empty) with sorted parameters."""
  count = rng.choices(num_params, weights=num_params_weights, k=1)[0]
  if count == 0:
    return ''
  seen = set()
  pairs = sorted(param_pair(rng, seen) for _ in range(count))
  return '?' + '&'.join(pairs)


### ================= Final URL Generation ================= ###

def generate_urls(num_urls, seed=None, config=None):
  """Generate a list of `num_urls` random URLs, reproducible for a given seed."""
  if num_urls < 1:
    raise ValueError("num_urls must be positive")
  config = config or URLConfig()
  rng = random.Random(seed)
  domains, weights = load_domains(config, seed)
  urls = []
  for _ in range(num_urls):
    scheme = pick_scheme(rng, config.https_share)
    host = sample_host(domains, weights, rng)
    path = gen_path(rng, config.slug_p)
    query = query_string(rng)
    urls.append(f"{scheme}://{host}{path}{query}")
  log.debug("generated %d urls over %d hosts", num_urls, len(domains))
  return urls
