"""
Agent パッケージ
- 会話ステートマシン
- ターミナルアクション
- Webhook イベントハンドラ
"""
