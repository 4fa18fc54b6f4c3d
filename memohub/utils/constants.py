APP_ORG = "MemoHub"
APP_NAME = "MemoHub"

MAX_URLS = 5

DATETIME_FORMAT = "%Y-%m-%d %H:%M"
FILE_DATE_FORMAT = "%Y%m%d"
DEFAULT_FILE_TITLE_LENGTH = 50

IMAGE_PLACEHOLDER = "<<画像>>"
DIVIDER_WIDTH = 40

# Labels shown in exported documents
LABEL_CATEGORY = "カテゴリ"
LABEL_TAGS = "タグ"
LABEL_CREATED = "作成日"
LABEL_UPDATED = "更新日"
LABEL_URLS = "関連URL"
LABEL_PRIORITY = "重要度"
LABEL_FAVORITE = "★ お気に入り"
LABEL_LINKS = "リンク:"
LABEL_CREATED_SHORT = "作成"
LABEL_UPDATED_SHORT = "更新"

PRIORITY_LABELS = {1: "高", 2: "中", 3: "低"}

DEFAULT_DOCUMENT_LABEL = "MemoHub Export"
DEFAULT_FONT_NAME = "Yu Gothic"
DEFAULT_FONT_SIZE = 12
DEFAULT_CODE_FONT = "Consolas"
DEFAULT_PRINT_DELAY_MS = 500
WORD_BATCH_PREFIX = "notes-"

CSS_PRINT = """
* { box-sizing: border-box; }
body {
  font-family: "Noto Sans JP", "Hiragino Kaku Gothic ProN", "Yu Gothic", Meiryo, sans-serif;
  color: #111; margin: 0 auto; max-width: 800px; padding: 24px; line-height: 1.7;
}
.instructions {
  background: #eef5ff; border: 1px solid #9cc3ff; border-radius: 8px;
  padding: 12px 16px; margin-bottom: 24px; font-size: 14px; position: relative;
}
.instructions button {
  position: absolute; top: 8px; right: 8px; border: none; background: transparent;
  font-size: 18px; cursor: pointer;
}
.instructions code { background: #fff; padding: .1rem .3rem; border-radius: 4px; }
h1 { font-size: 24px; margin: 0 0 16px; }
.meta { background: #f5f5f5; border-radius: 6px; padding: 10px 14px; color: #666; font-size: 13px; }
.meta p { margin: 2px 0; }
hr { border: none; border-top: 1px solid #ccc; margin: 20px 0; }
.content { font-size: 15px; word-wrap: break-word; }
.urls h2 { font-size: 17px; }
.urls ul { padding-left: 1.2rem; }
.urls a { color: #0066cc; word-break: break-all; }
@media print {
  .instructions { display: none !important; }
  body { padding: 0; }
}
"""

HTML_TEMPLATE = """<!doctype html>
<html lang="ja">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1.0"/>
<title>{title}</title>
<style>{css}</style>
</head>
<body>
{body}
</body>
</html>
"""
