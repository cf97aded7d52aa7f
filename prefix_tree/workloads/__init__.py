from prefix_tree.workloads.url_generator import URLConfig, generate_urls
from prefix_tree.workloads.en_word_generator import generate_random_words, gen_words_with_prefix_freq
from prefix_tree.workloads.ip_generator import IPConfig, IPGenerator


class WorkLoad:
  def __init__(self, seed=None):
    self.seed = seed

  def words(self, num_words, p_freq=0, unique=False):
    if p_freq > 0:
      return gen_words_with_prefix_freq(num_words, p_freq, self.seed, unique)
    return generate_random_words(num_words, self.seed, unique)

  def urls(self, num_urls, config=None):
    return generate_urls(num_urls, self.seed, config)

  def ips(self, num_ips, as_bits=False, config=None):
    config = config or IPConfig(seed=self.seed)
    return IPGenerator(config).batch(num_ips, as_bits=as_bits)


__all__ = [
  "IPConfig",
  "IPGenerator",
  "URLConfig",
  "WorkLoad",
  "gen_words_with_prefix_freq",
  "generate_random_words",
  "generate_urls",
]
