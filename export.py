from etymology import Found
from stemmer import stem as lancaster_stem

TABLE_HEADER = (
    "| Word | Stem | Expanded Form | Etymology |\n"
    "|------|------|---------------|-----------|"
)


def table_row(result, stem=lancaster_stem) -> str:
    """
    One pipe-delimited row. Found words carry their raw, unrendered
    etymology markup; failed words carry the error message instead.
    """
    if isinstance(result, Found):
        expanded_form = result.expanded_form or ""
        etymology = result.etymology
    else:
        expanded_form = ""
        etymology = result.error

    return f"| {result.word} | {stem(result.word)} | {expanded_form} | {etymology} |"


def generate_table_text(results, stem=lancaster_stem) -> str:
    rows = [table_row(result, stem) for result in results]
    return f"{TABLE_HEADER}\n" + "\n".join(rows)
