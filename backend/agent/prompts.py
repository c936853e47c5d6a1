# ============================================
# 固定メッセージ
# ============================================

WELCOME_MESSAGE = """友だち追加ありがとうございます！🏕️
キャンプのお手伝いをするボットです。

メニューから選んでください:
・きゃんぷ場調べ
・野営地調べ
・持ち物提案

それ以外のメッセージには、キャンプ好きのアシスタントがお答えします😊"""

APOLOGY_MESSAGE = "申し訳ありません。情報を取得できませんでした。時間をおいてもう一度お試しください🙇"

GENERAL_FALLBACK_MESSAGE = "すみません、うまくお答えできませんでした。もう一度送ってみてください。"

# メニュー (リッチメニュー) から送られてくるトリガー文言
CAMP_TRIGGER = "きゃんぷ場調べ"
BIVOUAC_TRIGGER = "野営地調べ"
ITEM_TRIGGER = "持ち物提案"

# 各ステップの質問文
CAMP_REGION_PROMPT = "どの地域のキャンプ場を探しますか？（例：東京、長野県）"
CAMP_DATE_PROMPT = "いつ行く予定ですか？（例：3/1）"
CAMP_CONDITIONS_PROMPT = "希望の条件を教えてください（例：ペット可、温泉が近い）"

BIVOUAC_PREFECTURE_PROMPT = "どの都道府県で野営地を探しますか？（例：北海道）"
BIVOUAC_CONDITIONS_PROMPT = "希望の条件を教えてください（例：無料、水場あり）"

ITEM_LOCATION_PROMPT = "どこでキャンプしますか？（例：山、海、河原）"
ITEM_DURATION_PROMPT = "何泊の予定ですか？（例：1泊2日）"
ITEM_CONDITIONS_PROMPT = "その他の条件を教えてください（例：冬、ソロ、子連れ）"

# 受付メッセージ (収集した値をそのまま引用する)
CAMP_ACK_TEMPLATE = "「{region}」で{date}に「{conditions}」の条件に合うキャンプ場を探します。少々お待ちください⏳"
BIVOUAC_ACK_TEMPLATE = "「{prefecture}」で「{conditions}」の条件に合う野営地を探します。少々お待ちください⏳"
ITEM_ACK_TEMPLATE = "「{location}」で{duration}、「{conditions}」の条件に合う持ち物を考えます。少々お待ちください⏳"

# ============================================
# 生成プロンプト
# ============================================

GENERAL_SYSTEM_PROMPT = """あなたはキャンプが大好きな、親切で明るいアウトドアアシスタントです。
ユーザーの質問に、やさしい口調で簡潔に答えてください。
- キャンプ・アウトドアに関する話題が得意です。
- 危険を伴う行為については安全面の注意を必ず添えてください。
- 分からないことは正直に分からないと伝えてください。
- 回答は500文字以内にしてください。"""

CAMP_SEARCH_PROMPT = """{region}周辺で、{date}に利用できるキャンプ場を3つ紹介してください。
条件: {conditions}

出力形式は必ず次の形にしてください。キャンプ場名以外は書かないでください。
1. キャンプ場名
2. キャンプ場名
3. キャンプ場名"""

CAMP_DETAIL_PROMPT = """次のキャンプ場について、それぞれの特徴・料金の目安・アクセスを簡潔に説明してください。
条件「{conditions}」に関係する情報があれば必ず含めてください。

{names}"""

BIVOUAC_SEARCH_PROMPT = """{prefecture}で野営（キャンプ場以外でのテント泊）ができる場所を3つ紹介してください。
条件: {conditions}

出力形式は必ず次の形にしてください。
1. 場所の名前
おすすめスポット: その場所でおすすめの地点
特徴・注意点: 特徴や、許可・マナーなどの注意点
2. 場所の名前
おすすめスポット: ...
特徴・注意点: ..."""

ITEM_SUGGEST_PROMPT = """{location}で{duration}のキャンプをします。条件: {conditions}
必要な持ち物を重要な順に3つ挙げてください。

出力形式は必ず次の形にしてください。
1. 持ち物名: 必要な理由
2. 持ち物名: 必要な理由"""

ITEM_DETAIL_PROMPT = """{location}で{duration}のキャンプ（条件: {conditions}）に「{name}」を持っていきます。
選び方のポイントと使い方のコツを3行程度で教えてください。"""
