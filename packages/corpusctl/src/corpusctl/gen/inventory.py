from __future__ import annotations

from ..model import Corpus


def inventory_rows(corpus: Corpus) -> list[dict[str, object]]:
    return [
        {
            "path": doc.path,
            "title": doc.title,
            "date": doc.date.isoformat() if doc.date else None,
            "keywords": list(doc.keywords),
            "references": len(doc.references),
            "samples": len(doc.samples),
            "headings": len(doc.headings),
        }
        for doc in corpus
    ]


def _cell(value: object) -> str:
    return str(value).replace("|", "\\|")


def render_inventory_markdown(rows: list[dict[str, object]]) -> str:
    lines = [
        "# Document Inventory",
        "",
        f"Documents: {len(rows)}",
        "",
        "| Path | Title | Date | Keywords | Refs | Samples |",
        "|---|---|---|---|---|---|",
    ]
    for row in rows:
        keywords = ", ".join(str(k) for k in row["keywords"]) or "-"  # type: ignore[union-attr]
        lines.append(
            f"| `{row['path']}` | {_cell(row['title'] or '-')} | {row['date'] or '-'} | {_cell(keywords)} | {row['references']} | {row['samples']} |"
        )
    if not rows:
        lines.append("| (none) | n/a | n/a | n/a | 0 | 0 |")
    return "\n".join(lines) + "\n"
