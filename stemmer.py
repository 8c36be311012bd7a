from nltk.stem import LancasterStemmer

_LANCASTER = LancasterStemmer()


def stem(word: str) -> str:
    """
    Reduce a word to its Lancaster (Paice/Husk) stem.
    """
    return _LANCASTER.stem(word)
