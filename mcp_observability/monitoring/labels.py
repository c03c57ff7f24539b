"""
MCP Observability - Label Keys
ラベルセットと内部キー文字列の相互変換

ラベルセットはキーでソートし ``key:value`` を ``,`` で連結した文字列に正規化する。
キーや値に含まれる ``\\``、``:``、``,`` はバックスラッシュでエスケープするため、
区切り文字を含むラベルでも別のラベルセットと衝突しない。
"""

from typing import Dict, List, Optional

Labels = Optional[Dict[str, str]]

_ESCAPE = "\\"
_PAIR_SEPARATOR = ","
_KEY_VALUE_SEPARATOR = ":"


def _escape(text: str) -> str:
    return (
        str(text)
        .replace(_ESCAPE, _ESCAPE * 2)
        .replace(_KEY_VALUE_SEPARATOR, _ESCAPE + _KEY_VALUE_SEPARATOR)
        .replace(_PAIR_SEPARATOR, _ESCAPE + _PAIR_SEPARATOR)
    )


def labels_to_key(labels: Labels = None) -> str:
    """ラベルセットを正規化したキー文字列に変換"""
    if not labels:
        return ""

    return _PAIR_SEPARATOR.join(
        f"{_escape(key)}{_KEY_VALUE_SEPARATOR}{_escape(labels[key])}"
        for key in sorted(labels)
    )


def _split_unescaped(text: str, separator: str) -> List[str]:
    """エスケープされていない区切り文字で分割（エスケープはそのまま残す）"""
    parts = []
    current = []
    escaped = False

    for char in text:
        if escaped:
            current.append(_ESCAPE + char)
            escaped = False
        elif char == _ESCAPE:
            escaped = True
        elif char == separator:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)

    if escaped:
        current.append(_ESCAPE)
    parts.append("".join(current))
    return parts


def _unescape(text: str) -> str:
    result = []
    escaped = False
    for char in text:
        if escaped:
            result.append(char)
            escaped = False
        elif char == _ESCAPE:
            escaped = True
        else:
            result.append(char)
    return "".join(result)


def key_to_labels(key: str) -> Dict[str, str]:
    """キー文字列をラベルセットに戻す"""
    if not key:
        return {}

    labels = {}
    for pair in _split_unescaped(key, _PAIR_SEPARATOR):
        parts = _split_unescaped(pair, _KEY_VALUE_SEPARATOR)
        if len(parts) != 2:
            continue
        labels[_unescape(parts[0])] = _unescape(parts[1])

    return labels
