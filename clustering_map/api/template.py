"""Locally generated spreadsheet template, served when GET /template fails."""

from __future__ import annotations

import csv
from typing import Any, Dict, List, Literal

import pandas as pd

from ..models.files import Artifact
from .artifacts import make_artifact

TemplateVariant = Literal["sample", "minimal"]

TEXT_HEADER = "自由記述"
SAMPLE_HEADERS = ["ID", "回答者", TEXT_HEADER, "グループ"]

SAMPLE_ROWS: List[Dict[str, Any]] = [
    {
        "ID": 1,
        "回答者": "Aさん",
        "自由記述": "このサービスはとても使いやすく、機能も充実しています。特にUIが分かりやすいのが良いです。",
        "グループ": "満足",
    },
    {
        "ID": 2,
        "回答者": "Bさん",
        "自由記述": "料金が少し高いと感じます。もう少し安くなれば利用したいです。",
        "グループ": "不満",
    },
    {
        "ID": 3,
        "回答者": "Cさん",
        "自由記述": "サポートが丁寧で、問題がすぐに解決されました。ありがとうございます。",
        "グループ": "満足",
    },
    {
        "ID": 4,
        "回答者": "Dさん",
        "自由記述": "機能は良いのですが、もう少しシンプルな操作ができると良いです。",
        "グループ": "改善要望",
    },
    {
        "ID": 5,
        "回答者": "Eさん",
        "自由記述": "全体的に満足しています。継続して利用したいと思います。",
        "グループ": "満足",
    },
]


def build_template_csv(variant: TemplateVariant = "sample") -> bytes:
    """Render the template as UTF-8 CSV with a BOM so Excel detects the encoding.

    Args:
        variant: "sample" for the full ID/回答者/自由記述/グループ layout,
                 "minimal" for the free-text column alone.
    """
    df = pd.DataFrame(SAMPLE_ROWS, columns=SAMPLE_HEADERS)
    if variant == "minimal":
        df = df[[TEXT_HEADER]]
    elif variant != "sample":
        raise ValueError(f"Unknown template variant: {variant}")

    text = df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
    return ("\ufeff" + text).encode("utf-8")


def build_local_template(variant: TemplateVariant = "sample") -> Artifact:
    return make_artifact("template_fallback", build_template_csv(variant))
