from __future__ import annotations

from dataclasses import dataclass

CHINESE_STOPWORDS = frozenset(
    "的 是 在 有 和 與 或 但 了 著 也 就 都 而 及 等 這 那 我 你 他 她 它 們 會 能 可 要 不 沒 "
    "很 更 最 些 個 裡 上 下 中 大 小 來 去 出 到 把 被 對 從 讓 給 為 以 將 用 又 因 所 其 於".split()
)

ENGLISH_STOPWORDS = frozenset(
    """
    a an the is are was were be been being have has had do does did will would
    should could may might must can of to for with on at by from in into through
    during before after above below between under over about against as or and
    but if then than so such no not only own same too very just where when why
    how all each every both few more most other some any there here this that
    these those
    """.split()
)

DEFAULT_STOPWORDS = CHINESE_STOPWORDS | ENGLISH_STOPWORDS


@dataclass(frozen=True)
class HashtagConfig:
    top_user_n: int = 2
    top_content_n: int = 3
    max_tags: int = 5
    min_length: int = 2
    max_length: int = 10
    stopwords: frozenset[str] = DEFAULT_STOPWORDS


DEFAULT_HASHTAG_CONFIG = HashtagConfig()
