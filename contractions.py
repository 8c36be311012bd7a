from pathlib import Path
from typing import Optional

CONTRACTIONS_FILE = Path(__file__).parent / "contractions.txt"


def load_contractions(path) -> dict[str, str]:
    """
    Load contraction -> expanded form pairs from a tab-delimited file.
    Keys keep their case ("I'm" and "i'm" are different keys).
    """
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    out = {}
    for line in lines:
        if not line.strip():
            continue
        if "\t" not in line:
            continue  # skip malformed lines
        contraction, expanded = line.split("\t", 1)
        out[contraction.strip()] = expanded.strip()
    return out


CONTRACTIONS = load_contractions(CONTRACTIONS_FILE)


def expand_contraction(word: str) -> Optional[str]:
    return CONTRACTIONS.get(word)
