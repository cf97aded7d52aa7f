"""
Tests for:
  - prefix_tree.workloads.en_word_generator
  - prefix_tree.workloads.url_generator
  - prefix_tree.workloads.ip_generator
  - prefix_tree.workloads.WorkLoad

No network access: URL hosts come from Faker (Tranco stays disabled).
"""

import ipaddress
import unittest
from collections import Counter
from urllib.parse import urlparse

from prefix_tree.workloads import (
    IPConfig,
    IPGenerator,
    URLConfig,
    WorkLoad,
    gen_words_with_prefix_freq,
    generate_random_words,
    generate_urls,
)
from prefix_tree.workloads.en_word_generator import WORDS_BROAD, WORDS_COMMON
from prefix_tree.workloads.ip_generator import ip_to_bits, subnet_bits


# ---------- Helpers for prefix clustering metrics ----------
def two_prefix(w: str) -> str:
    return w[:2] if len(w) >= 2 else w

def avg_run_length(words):
    """Average run-length of consecutive identical 2-char prefixes."""
    if not words:
        return 0.0
    prev = two_prefix(words[0])
    run = 1
    runs = []
    for w in words[1:]:
        p = two_prefix(w)
        if p == prev:
            run += 1
        else:
            runs.append(run)
            run = 1
            prev = p
    runs.append(run)
    return sum(runs) / len(runs)

def prefix_hhi(words):
    """Herfindahl-Hirschman index over 2-char prefixes; higher => more concentrated."""
    n = len(words)
    if n == 0:
        return 0.0
    counts = Counter(two_prefix(w) for w in words)
    return sum((c / n) ** 2 for c in counts.values())


# ---------------------------------- Words ----------------------------------
class TestWordLists(unittest.TestCase):
    def test_lists_are_clean(self):
        self.assertGreater(len(WORDS_COMMON), 500)
        self.assertGreater(len(WORDS_BROAD), len(WORDS_COMMON))
        for w in WORDS_BROAD:
            self.assertTrue(w.isalpha() and w == w.lower(), w)
        self.assertEqual(len(set(WORDS_BROAD)), len(WORDS_BROAD))


class TestGenerateRandomWords(unittest.TestCase):
    def test_length_and_types_nonunique(self):
        words = generate_random_words(5_000, seed=123, unique=False)
        self.assertEqual(len(words), 5_000)
        self.assertTrue(all(isinstance(w, str) and len(w) > 0 for w in words))

    def test_reproducibility(self):
        a = generate_random_words(2_000, seed=999)
        b = generate_random_words(2_000, seed=999)
        c = generate_random_words(2_000, seed=1000)
        self.assertEqual(a, b)
        self.assertNotEqual(a, c)

    def test_uniqueness(self):
        n = 300
        words = generate_random_words(n, seed=42, unique=True)
        self.assertEqual(len(set(words)), n)

    def test_invalid_counts_raise(self):
        with self.assertRaises(ValueError):
            generate_random_words(0, seed=1)
        with self.assertRaises(ValueError):
            generate_random_words(len(WORDS_COMMON) + 1, seed=1, unique=True)


class TestPrefixFrequencyGenerator(unittest.TestCase):
    def test_basic_length_and_types(self):
        words = gen_words_with_prefix_freq(5_000, prefix_freq=0.0, seed=7)
        self.assertEqual(len(words), 5_000)
        self.assertTrue(all(w in WORDS_BROAD for w in words[:200]))

    def test_prefix_clustering_effectiveness(self):
        n = 20_000
        low = gen_words_with_prefix_freq(n, prefix_freq=0.0, seed=123)
        high = gen_words_with_prefix_freq(n, prefix_freq=0.8, seed=123)
        self.assertGreater(avg_run_length(high), max(avg_run_length(low) * 3.0, 3.0))
        self.assertGreater(prefix_hhi(high), prefix_hhi(low) * 0.5)

    def test_unique_mode_no_duplicates(self):
        n = 2_000
        words = gen_words_with_prefix_freq(n, prefix_freq=0.2, seed=9, unique=True)
        self.assertEqual(len(words), n)
        self.assertEqual(len(set(words)), n)

    def test_unique_mode_drains_whole_vocabulary(self):
        words = gen_words_with_prefix_freq(len(WORDS_BROAD), prefix_freq=0.9, seed=10, unique=True)
        self.assertEqual(sorted(words), WORDS_BROAD)

    def test_same_seed_reproducibility(self):
        a = gen_words_with_prefix_freq(3_000, prefix_freq=0.5, seed=2024)
        b = gen_words_with_prefix_freq(3_000, prefix_freq=0.5, seed=2024)
        c = gen_words_with_prefix_freq(3_000, prefix_freq=0.5, seed=2025)
        self.assertEqual(a, b)
        self.assertNotEqual(a, c)

    def test_invalid_arguments_raise(self):
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(0, prefix_freq=0.3, seed=1)
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(10, prefix_freq=1.5, seed=1)
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(len(WORDS_BROAD) + 1, seed=1, unique=True)


# ---------------------------------- URLs ----------------------------------
class TestURLs(unittest.TestCase):
    def test_urls_parse(self):
        urls = generate_urls(300, seed=5)
        self.assertEqual(len(urls), 300)
        for u in urls:
            pu = urlparse(u)
            self.assertIn(pu.scheme, {"http", "https"}, u)
            self.assertTrue(pu.hostname and "." in pu.hostname, u)
            self.assertTrue(pu.path.startswith("/"), u)
            self.assertEqual(pu.fragment, "", u)

    def test_reproducibility(self):
        self.assertEqual(generate_urls(100, seed=11), generate_urls(100, seed=11))

    def test_host_sharing(self):
        urls = generate_urls(1_000, seed=3, config=URLConfig(num_domains=50))
        hosts = Counter(urlparse(u).hostname for u in urls)
        self.assertLessEqual(len(hosts), 50)
        # Zipf weighting: the top host clearly dominates the median one
        counts = sorted(hosts.values(), reverse=True)
        self.assertGreater(counts[0], counts[len(counts) // 2])

    def test_https_share(self):
        urls = generate_urls(200, seed=1, config=URLConfig(https_share=1.0))
        self.assertTrue(all(u.startswith("https://") for u in urls))

    def test_config_validation(self):
        with self.assertRaises(ValueError):
            URLConfig(https_share=1.5)
        with self.assertRaises(ValueError):
            URLConfig(slug_p=-0.1)
        with self.assertRaises(ValueError):
            URLConfig(num_domains=0)
        with self.assertRaises(ValueError):
            URLConfig(zipf_s=0)
        with self.assertRaises(ValueError):
            generate_urls(0, seed=1)

    def test_tranco_cache_outside_package(self):
        import os
        import prefix_tree

        cfg = URLConfig(use_tranco=True)
        pkg_dir = os.path.dirname(os.path.abspath(prefix_tree.__file__))
        self.assertFalse(os.path.abspath(cfg.cache_dir).startswith(pkg_dir))
        self.assertTrue(cfg.cache_dir.startswith(os.path.expanduser("~")))
        self.assertEqual(URLConfig(cache_dir="/tmp/tranco").cache_dir, "/tmp/tranco")


# ---------------------------------- IPs ----------------------------------
class TestIPs(unittest.TestCase):
    def test_batch_is_ipv4(self):
        ips = IPGenerator(IPConfig(seed=1)).batch(500)
        for ip in ips:
            ipaddress.IPv4Address(ip)

    def test_all_private(self):
        ips = IPGenerator(IPConfig(public_share=0.0, seed=2)).batch(200)
        self.assertTrue(all(ipaddress.IPv4Address(ip).is_private for ip in ips))

    def test_reproducibility(self):
        a = IPGenerator(IPConfig(seed=3)).batch(100)
        b = IPGenerator(IPConfig(seed=3)).batch(100)
        self.assertEqual(a, b)

    def test_bits(self):
        self.assertEqual(ip_to_bits("0.0.0.1"), "0" * 31 + "1")
        self.assertEqual(ip_to_bits("255.255.255.255"), "1" * 32)
        self.assertEqual(subnet_bits("10.0.0.0/8"), "00001010")
        self.assertEqual(subnet_bits("10.1.2.3/16"), "0000101000000001")
        self.assertEqual(subnet_bits("0.0.0.0/0"), "")
        bits = IPGenerator(IPConfig(seed=4)).batch(50, as_bits=True)
        self.assertTrue(all(len(b) == 32 and set(b) <= {"0", "1"} for b in bits))

    def test_subnets_enclose_hosts(self):
        gen = IPGenerator(IPConfig(seed=5))
        hosts = gen.batch(100)
        host_bits = [ip_to_bits(h) for h in hosts]
        for sb in gen.subnets(100, hosts=hosts, as_bits=True):
            self.assertTrue(any(hb.startswith(sb) for hb in host_bits), sb)
        for cidr in gen.subnets(20):
            ipaddress.IPv4Network(cidr)

    def test_config_validation(self):
        with self.assertRaises(ValueError):
            IPConfig(public_share=2.0)
        with self.assertRaises(ValueError):
            IPConfig(private_weights={'a': 1.0, 'b': 1.0})
        with self.assertRaises(ValueError):
            IPConfig(private_weights={'a': -1.0, 'b': 1.0, 'c': 1.0})
        with self.assertRaises(ValueError):
            IPConfig(private_weights={'a': 0, 'b': 0, 'c': 0})
        with self.assertRaises(ValueError):
            IPConfig(subnet_lengths=(33,))
        with self.assertRaises(ValueError):
            IPConfig(private_weights={'a': 1.0, 'b': 1.0, 'c': 1.0, 'd': 1.0})
        with self.assertRaises(ValueError):
            IPGenerator(IPConfig(seed=1)).batch(0)


# ---------------------------------- Facade ----------------------------------
class TestWorkLoad(unittest.TestCase):
    def test_facade(self):
        load = WorkLoad(seed=8)
        self.assertEqual(load.words(50), generate_random_words(50, seed=8))
        self.assertEqual(load.words(50, p_freq=0.5), gen_words_with_prefix_freq(50, 0.5, seed=8))
        self.assertEqual(len(load.urls(20)), 20)
        bits = load.ips(20, as_bits=True)
        self.assertEqual(len(bits), 20)
        self.assertTrue(all(len(b) == 32 for b in bits))


if __name__ == "__main__":
    unittest.main(verbosity=2)
