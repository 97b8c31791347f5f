from __future__ import annotations

import random
import string

from ..base64_codec import Base64

_MALFORMED_NUMBERS = [
    "-",
    "1.",
    "1e",
    "1E",
    "1.e",
    "1.0e",
    "1.0E+",
    "1.0e-",
    "0x",
    "-x",
    "9007199254740993",
    "-9007199254740992",
    "0x00000000000000000",
]

_MALFORMED_DATA = ["%A", "%AA", "%AAA", "%AA=A", "%A===", "AAAA"]


def _digits(r: random.Random, lo: int, hi: int) -> str:
    return "".join(r.choice(string.digits) for _ in range(r.randint(lo, hi)))


def _integer(r: random.Random) -> str:
    sign = "-" if r.random() < 0.3 else ""
    if r.random() < 0.1:
        return sign + "0"
    return sign + r.choice("123456789") + _digits(r, 0, 17)


def _number(r: random.Random) -> str:
    roll = r.random()
    if roll < 0.05:
        return r.choice(_MALFORMED_NUMBERS)
    if roll < 0.4:
        return _integer(r)
    if roll < 0.55:
        width = r.randint(1, 17)
        return "0x" + "".join(r.choice(string.hexdigits) for _ in range(width))
    out = _integer(r)[:10]
    if r.random() < 0.7:
        out += "." + _digits(r, 1, 8)
    if r.random() < 0.5 or "." not in out:
        out += r.choice("eE") + r.choice(["", "+", "-"]) + _digits(r, 1, 3)
    return out


def _data(r: random.Random) -> str:
    if r.random() < 0.05:
        return r.choice(_MALFORMED_DATA)
    raw = bytes(r.randrange(256) for _ in range(r.randint(0, 24)))
    return "%" + Base64.standard().encode(raw)


def generate_number_literals(*, seed: int, count: int) -> list[str]:
    r = random.Random(seed)
    return [_number(r) for _ in range(count)]


def generate_data_literals(*, seed: int, count: int) -> list[str]:
    r = random.Random(seed)
    return [_data(r) for _ in range(count)]


def split_chunks(r: random.Random, text: str) -> list[str]:
    """Cut `text` into one or more non-empty chunks at random points."""
    if len(text) <= 1:
        return [text]
    cuts = sorted(r.sample(range(1, len(text)), r.randint(0, len(text) - 1)))
    bounds = [0, *cuts, len(text)]
    return [text[a:b] for a, b in zip(bounds, bounds[1:])]


def generate_corpus_files(*, seed: int, count: int) -> list[tuple[str, str]]:
    """Generate a deterministic corpus as a *file set*.

    Returns a list of (relative_path, source). Even cases hold a number
    literal, odd cases a data literal; each file ends with a newline.
    """
    numbers = generate_number_literals(seed=seed, count=count)
    data = generate_data_literals(seed=seed + 1, count=count)
    files: list[tuple[str, str]] = []
    for i in range(count):
        src = numbers[i] if i % 2 == 0 else data[i]
        files.append((f"case_{i:06d}.recon", src + "\n"))
    return files
