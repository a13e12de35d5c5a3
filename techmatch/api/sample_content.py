"""
Built-in editorial entries served when neither the remote source nor the
local ``articles`` table has anything published for a type.

Entries are already in the public detail projection; ``read_time`` is
filled in from the body when the module is imported.
"""

from techmatch.database.core.articles import estimate_read_time_minutes, strip_html

COLUMN_CATEGORIES = {
    "patent-basics": "特許の基礎",
    "technology-trend": "技術トレンド",
    "case-study": "活用事例",
    "legal": "法律・制度",
}

INTERVIEW_CATEGORIES = {
    "university-researcher": "大学研究者",
    "corporate-researcher": "企業研究者",
    "startup": "スタートアップ",
}

_COLUMNS = [
    {
        "id": "sample-column-1",
        "title": "特許ライセンスの基本と契約時の注意点",
        "description": "特許を他社に使ってもらうライセンス契約の種類と、締結前に確認すべきポイントを解説します。",
        "content": (
            "<p>特許ライセンスには独占的通常実施権と非独占的通常実施権があり、対価の決め方も"
            "一時金方式とランニングロイヤルティ方式に分かれます。</p>"
            "<p>契約前には権利範囲、存続期間、改良発明の扱いを必ず確認しましょう。</p>"
        ),
        "category": "patent-basics",
        "author": "編集部",
        "created_at": "2025-01-15T09:00:00+09:00",
    },
    {
        "id": "sample-column-2",
        "title": "大学発技術の事業化を加速するマッチングの仕組み",
        "description": "研究成果と企業ニーズをつなぐ技術マッチングの流れと成功のコツを紹介します。",
        "content": (
            "<p>大学の研究成果を事業化するには、技術の強みを企業の課題に結び付けて説明することが重要です。</p>"
            "<p>課題・用途・優位性を明確にした掲載情報が、問い合わせ数を大きく左右します。</p>"
        ),
        "category": "technology-trend",
        "author": "編集部",
        "created_at": "2025-02-03T09:00:00+09:00",
    },
    {
        "id": "sample-column-3",
        "title": "休眠特許を収益に変えた中小企業の事例",
        "description": "自社で使われていなかった特許をライセンスし、新たな収益源とした事例を紹介します。",
        "content": (
            "<p>ある部品メーカーは、製品化を見送った技術の特許を異業種の企業にライセンスしました。</p>"
            "<p>結果として年間のロイヤルティ収入が研究開発費の一部をまかなうまでになりました。</p>"
        ),
        "category": "case-study",
        "author": "編集部",
        "created_at": "2025-03-10T09:00:00+09:00",
    },
]

_INTERVIEWS = [
    {
        "id": "sample-interview-1",
        "title": "材料科学の研究を社会実装へ",
        "description": "新素材の研究を続ける大学教授に、産学連携で技術を届けるまでの道のりを伺いました。",
        "content": (
            "<p>研究室で生まれた素材を製品にするには、企業との対話が欠かせません。</p>"
            "<p>特許を早い段階で出願しておいたことが、共同開発の話をスムーズにしました。</p>"
        ),
        "category": "university-researcher",
        "author": "編集部",
        "researcher": "山田 太郎",
        "affiliation": "東都大学 工学部",
        "created_at": "2025-01-22T09:00:00+09:00",
    },
    {
        "id": "sample-interview-2",
        "title": "企業研究所から見たオープンイノベーション",
        "description": "大手メーカーの研究者に、外部技術の導入と自社特許の活用について聞きました。",
        "content": (
            "<p>自社だけで全ての技術を揃える時代は終わりました。</p>"
            "<p>外部の特許を積極的に評価し、必要なものはライセンスを受けて開発期間を短縮しています。</p>"
        ),
        "category": "corporate-researcher",
        "author": "編集部",
        "researcher": "佐藤 花子",
        "affiliation": "日本テクノロジー株式会社 中央研究所",
        "created_at": "2025-02-18T09:00:00+09:00",
    },
    {
        "id": "sample-interview-3",
        "title": "特許を武器に資金調達したスタートアップ",
        "description": "大学の特許をもとに起業した創業者に、知財戦略と資金調達の関係を伺いました。",
        "content": (
            "<p>投資家にとって、技術が特許で守られているかどうかは重要な判断材料です。</p>"
            "<p>ライセンス契約を結んだことで、事業の独自性を説明しやすくなりました。</p>"
        ),
        "category": "startup",
        "author": "編集部",
        "researcher": "鈴木 一郎",
        "affiliation": "株式会社ネクストラボ",
        "created_at": "2025-03-25T09:00:00+09:00",
    },
]


def _complete(entry: dict, article_type: str, names: dict) -> dict:
    row = {
        "type": article_type,
        "researcher": None,
        "affiliation": None,
        "featured_image": None,
        **entry,
    }
    row["category_name"] = names.get(row["category"], row["category"])
    row["read_time"] = estimate_read_time_minutes(strip_html(row["content"]))
    return row


SAMPLE_ARTICLES = {
    "column": [_complete(entry, "column", COLUMN_CATEGORIES) for entry in _COLUMNS],
    "interview": [_complete(entry, "interview", INTERVIEW_CATEGORIES) for entry in _INTERVIEWS],
}
"""Sample entries per article type, in public detail projection."""


def sample_articles(article_type: str) -> list[dict]:
    """Copies of the samples for ``article_type`` (empty for unknown types)."""
    return [dict(entry) for entry in SAMPLE_ARTICLES.get(article_type, [])]
