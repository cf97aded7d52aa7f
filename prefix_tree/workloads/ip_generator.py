"""IPv4 workloads: host addresses and subnets, optionally as bit strings.

As bit strings, a host address is a 32-symbol key and a subnet is the prefix of
its network address, so `Trie.starts_with(subnet_bits(...))` answers "is any
stored host inside this subnet?".
"""

import ipaddress
import random
from typing import Dict, Optional
from dataclasses import dataclass
from faker import Faker

## === Config Class === ##

@dataclass
class IPConfig:
    """
    Configuration for IPGenerator
        public_share: float, proportion of public IPs
        private_weights: dict, weights for private IPs {a: x, b: x, c: x}
        subnet_lengths: tuple, prefix lengths drawn for subnets
        seed: int, seed for random number generator
    """
    public_share: float = 0.9  # fraction of public IPs
    private_weights: Optional[Dict[str, float]] = None  # weights for {'a','b','c'}
    subnet_lengths: tuple = (8, 16, 20, 24, 28)
    seed: Optional[int] = None

    def __post_init__(self):
        if not 0.0 <= self.public_share <= 1.0:
            raise ValueError("public_share must be between 0 and 1")
        if not self.subnet_lengths or any(not 0 <= n <= 32 for n in self.subnet_lengths):
            raise ValueError("subnet_lengths must be non-empty and within 0..32")
        if self.private_weights is None:
            self.private_weights = {'a': 0.35, 'b': 0.10, 'c': 0.55}
            return
        missing = [k for k in ('a', 'b', 'c') if k not in self.private_weights]
        if missing:
            raise ValueError(f"private_weights missing keys: {missing}")
        unknown = sorted(set(self.private_weights) - {'a', 'b', 'c'})
        if unknown:
            raise ValueError(f"private_weights has unknown address classes: {unknown}")
        if any(self.private_weights[k] < 0 for k in ('a', 'b', 'c')):
            raise ValueError("private_weights must be non-negative")
        if sum(self.private_weights[k] for k in ('a', 'b', 'c')) == 0:
            raise ValueError("Sum of private_weights must be > 0")
        self.private_weights = {cls: self.private_weights[cls] for cls in sorted(self.private_weights)}


def ip_to_bits(ip: str) -> str:
    """32-character bit string of an IPv4 address, most significant bit first."""
    return format(int(ipaddress.IPv4Address(ip)), "032b")


def subnet_bits(cidr: str) -> str:
    """Network-prefix bits of a CIDR block, e.g. '10.0.0.0/8' -> '00001010'."""
    net = ipaddress.IPv4Network(cidr, strict=False)
    return ip_to_bits(str(net.network_address))[:net.prefixlen]


class IPGenerator:
    def __init__(self, config: IPConfig):
        self.config = config
        self.rng = random.Random(self.config.seed)

        self.fake = Faker()
        if self.config.seed is not None:
            self.fake.seed_instance(self.config.seed)
        self.priv_classes, self.weights = zip(*self.config.private_weights.items())

    def _priv_class(self):
        return self.rng.choices(self.priv_classes, weights=self.weights, k=1)[0]

    def single(self, as_bits=False):
        if self.rng.random() > self.config.public_share:
            ip = self.fake.ipv4_private(address_class=self._priv_class())
        else:
            ip = self.fake.ipv4_public()
        return ip_to_bits(ip) if as_bits else ip

    def batch(self, n, as_bits=False):
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.single(as_bits) for _ in range(n)]

    def subnets(self, n, hosts=None, as_bits=False):
        """Draw `n` CIDR blocks.

        With `hosts`, each block is the enclosing subnet of a host picked from
        that list (guaranteed non-empty under a trie of those hosts); otherwise
        it encloses a freshly generated address.
        """
        if n <= 0:
            raise ValueError("n must be positive")
        out = []
        for _ in range(n):
            ip = self.rng.choice(hosts) if hosts else self.single()
            length = self.rng.choice(self.config.subnet_lengths)
            cidr = str(ipaddress.IPv4Network(f"{ip}/{length}", strict=False))
            out.append(subnet_bits(cidr) if as_bits else cidr)
        return out
