"""User-facing messages shown inline by the step views (Japanese UI)."""

INVALID_FILE_TYPE = "Excelファイル（.xlsx, .xls）をアップロードしてください。"
FILE_TOO_LARGE = "ファイルサイズが大きすぎます。50MB以下のファイルをアップロードしてください。"

TEXT_COLUMN_REQUIRED = "自由記述の列を選択してください。"
UNKNOWN_COLUMN = "列「{column}」はアップロードされたファイルに存在しません。"

TAG_UPDATE_FAILED = "タグ辞書の更新に失敗しました。"

SERVER_ERROR = "サーバーエラーが発生しました"
INVALID_RESPONSE = "サーバーから不正なレスポンスが返されました"
NETWORK_ERROR = "ネットワークエラー: サーバーに接続できません ({base_url})"
CLIENT_ERROR = "予期しないエラー: {detail}"
