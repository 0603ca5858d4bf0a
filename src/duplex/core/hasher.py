"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements streaming content hashing with pluggable hash algorithms.

Files are read in fixed-size blocks so memory use does not depend on file size.
Digests are hex strings cached on the File object; imported digests are never recomputed.
"""

import hashlib
import logging
import xxhash
from duplex.core.models import File, HashAlgorithmName
from duplex.core.interfaces import Hasher, HashAlgorithm, HashState
from duplex.core.errors import FileVanishedError, FileAccessError

logger = logging.getLogger(__name__)

HASH_BLOCK_SIZE = 1024 * 1024


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxHash64"
    digest_length = 16

    def new(self) -> HashState:
        return xxhash.xxh64()


class MD5AlgorithmImpl(HashAlgorithm):
    name = "MD5"
    digest_length = 32

    def new(self) -> HashState:
        return hashlib.md5()


ALGORITHMS = {
    HashAlgorithmName.XXHASH: XXHashAlgorithmImpl,
    HashAlgorithmName.MD5: MD5AlgorithmImpl,
}


def algorithm_for(name: HashAlgorithmName) -> HashAlgorithm:
    return ALGORITHMS[name]()


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Streams the whole file and caches the digest in File.digest.
    """

    def __init__(self, algorithm: HashAlgorithm = None, block_size: int = HASH_BLOCK_SIZE):
        self.algorithm = algorithm or XXHashAlgorithmImpl()
        self.block_size = block_size

    def compute_digest(self, file: File) -> str:
        """
        Returns the cached digest or computes it.

        Raises:
            FileVanishedError: the file no longer exists
            FileAccessError: the file cannot be opened or read
        """
        if file.digest is not None:
            return file.digest

        state = self.algorithm.new()
        try:
            with open(file.path, 'rb') as f:
                for block in iter(lambda: f.read(self.block_size), b''):
                    state.update(block)
        except FileNotFoundError:
            raise FileVanishedError(file.path)
        except OSError as e:
            raise FileAccessError(file.path, e.strerror or str(e)) from e

        digest = state.hexdigest()
        file.set_digest(digest)
        logger.debug(f"{self.algorithm.name}: {file}")
        return digest
