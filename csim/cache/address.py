from __future__ import annotations


def decode_address(address: int, block_size: int, num_sets: int) -> tuple[int, int]:
    """Splits an address into (set_index, tag); the block offset is dropped."""
    if address < 0:
        raise ValueError(f"Address must be non-negative, got {address}.")
    offset_bits = block_size.bit_length() - 1
    index_bits = num_sets.bit_length() - 1
    set_index = (address >> offset_bits) & (num_sets - 1)
    tag = address >> (offset_bits + index_bits)
    return set_index, tag


class AddressDecoder:
    """Address decomposition for one cache geometry, with the shifts precomputed."""

    def __init__(self, block_size: int, num_sets: int):
        self.offset_bits = block_size.bit_length() - 1
        self.index_bits = num_sets.bit_length() - 1
        self.index_mask = num_sets - 1

    def decode(self, address: int) -> tuple[int, int]:
        if address < 0:
            raise ValueError(f"Address must be non-negative, got {address}.")
        set_index = (address >> self.offset_bits) & self.index_mask
        tag = address >> (self.offset_bits + self.index_bits)
        return set_index, tag

    def reconstruct_address(self, tag: int, set_index: int) -> int:
        """Reconstructs the block start address from tag and index."""
        return (tag << (self.index_bits + self.offset_bits)) | (set_index << self.offset_bits)
