from __future__ import annotations
from dataclasses import dataclass, field

from ..errors import ConfigurationError
from .policy import WriteMissPolicy, WriteHitPolicy, EvictionPolicy

MIN_BLOCK_SIZE = 4


def is_power_of_two(n) -> bool:
    return isinstance(n, int) and not isinstance(n, bool) and n > 0 and (n & (n - 1)) == 0


@dataclass(frozen=True)
class CostModel:
    """Cycle costs charged by the simulator."""
    hit_cycles: int = 1
    memory_cycles: int = 100  # One word to or from main memory
    word_bytes: int = 4

    def __post_init__(self):
        for name in ("hit_cycles", "memory_cycles", "word_bytes"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigurationError(f"Cost model value '{name}' must be a positive integer, got {value!r}.")

    def block_transfer_cycles(self, block_size: int) -> int:
        """Cycles to move one whole block between cache and memory."""
        return self.memory_cycles * (block_size // self.word_bytes)


@dataclass(frozen=True)
class CacheConfiguration:
    """Validated shape and policies of the simulated cache."""
    num_sets: int
    lines_per_set: int
    block_size: int
    write_miss: WriteMissPolicy = WriteMissPolicy.WRITE_ALLOCATE
    write_hit: WriteHitPolicy = WriteHitPolicy.WRITE_BACK
    eviction: EvictionPolicy = EvictionPolicy.LRU
    cost: CostModel = field(default_factory=CostModel)

    def __post_init__(self):
        if not (is_power_of_two(self.num_sets) and is_power_of_two(self.lines_per_set)
                and is_power_of_two(self.block_size)):
            raise ConfigurationError("All size parameters must be positive powers of 2.")
        if self.block_size < MIN_BLOCK_SIZE:
            raise ConfigurationError(f"Block size must be >= {MIN_BLOCK_SIZE} bytes.")

        # Accept command-line spellings for the policy fields
        object.__setattr__(self, "write_miss", WriteMissPolicy.parse(self.write_miss))
        object.__setattr__(self, "write_hit", WriteHitPolicy.parse(self.write_hit))
        object.__setattr__(self, "eviction", EvictionPolicy.parse(self.eviction))

        if self.write_miss is WriteMissPolicy.NO_WRITE_ALLOCATE and self.write_hit is WriteHitPolicy.WRITE_BACK:
            raise ConfigurationError("no-write-allocate cannot be used with write-back.")
        if self.block_size < self.cost.word_bytes:
            raise ConfigurationError(f"Block size must hold at least one {self.cost.word_bytes}-byte word.")

    @property
    def offset_bits(self) -> int:
        return self.block_size.bit_length() - 1

    @property
    def index_bits(self) -> int:
        return self.num_sets.bit_length() - 1

    @property
    def words_per_block(self) -> int:
        return self.block_size // self.cost.word_bytes

    @property
    def write_allocate(self) -> bool:
        return self.write_miss is WriteMissPolicy.WRITE_ALLOCATE

    @property
    def write_back(self) -> bool:
        return self.write_hit is WriteHitPolicy.WRITE_BACK

    @property
    def use_lru(self) -> bool:
        return self.eviction is EvictionPolicy.LRU

    def describe(self) -> str:
        return (f"{self.num_sets} sets x {self.lines_per_set} lines x {self.block_size}B, "
                f"{self.write_miss}, {self.write_hit}, {self.eviction}")

    def to_dict(self) -> dict:
        return {
            "num_sets": self.num_sets,
            "lines_per_set": self.lines_per_set,
            "block_size": self.block_size,
            "write_miss": self.write_miss.value,
            "write_hit": self.write_hit.value,
            "eviction": self.eviction.value,
            "hit_cycles": self.cost.hit_cycles,
            "memory_cycles": self.cost.memory_cycles,
            "word_bytes": self.cost.word_bytes,
        }


def validate_configuration(num_sets, lines_per_set, block_size,
                           write_miss, write_hit, eviction,
                           cost: CostModel | None = None) -> CacheConfiguration:
    """
    Checks the six raw configuration inputs and returns a CacheConfiguration.

    Checks run in order: sizes are positive powers of two, the block holds at
    least one 4-byte word, and the write-allocate/write-back pairing is legal.
    Raises ConfigurationError on the first failure.
    """
    return CacheConfiguration(
        num_sets=num_sets,
        lines_per_set=lines_per_set,
        block_size=block_size,
        write_miss=write_miss,
        write_hit=write_hit,
        eviction=eviction,
        cost=cost if cost is not None else CostModel(),
    )
