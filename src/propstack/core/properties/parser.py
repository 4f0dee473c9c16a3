# src/propstack/core/properties/parser.py
"""
Parser de arquivos de propriedades (`key=value`).

Formato aceito:
    - uma entrada por linha: `chave=valor` ou `chave: valor`
      (o primeiro `=` ou `:` separa chave e valor)
    - linhas iniciadas por `#` ou `!` são comentários
    - linhas em branco são ignoradas
    - espaços em volta da chave e do valor são removidos
    - chaves repetidas: a última ocorrência vence

Linhas sem separador ou com chave vazia geram `ConfigParseError`
identificando arquivo e linha. Arquivo inexistente não é erro: o loader
recebe `None` e produz uma camada vazia.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from .errors import ConfigParseError

_COMMENT_MARKERS = ("#", "!")
_SEPARATORS = ("=", ":")


def parse_properties(text: str, *, source: str = "<string>") -> Dict[str, str]:
    props: Dict[str, str] = {}
    for line_number, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith(_COMMENT_MARKERS):
            continue

        positions = [stripped.find(sep) for sep in _SEPARATORS if sep in stripped]
        if not positions:
            raise ConfigParseError(source, line_number, raw, "missing '=' separator")

        index = min(positions)
        key = stripped[:index].strip()
        if not key:
            raise ConfigParseError(source, line_number, raw, "empty property name")

        props[key] = stripped[index + 1:].strip()
    return props


def load_properties_file(path: Path) -> Optional[Dict[str, str]]:
    """
    Lê e interpreta um arquivo de propriedades.

    Returns:
        Optional[Dict[str, str]]: Propriedades do arquivo, ou None quando o
        arquivo não existe.

    Raises:
        ConfigParseError: Se alguma linha for malformada ou não for UTF-8
            válido (a linha reportada é a do primeiro byte inválido).
    """
    if not path.is_file():
        return None
    data = path.read_bytes()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        line_number = data[: exc.start].count(b"\n") + 1
        line_start = data.rfind(b"\n", 0, exc.start) + 1
        line_end = data.find(b"\n", exc.start)
        if line_end == -1:
            line_end = len(data)
        line = data[line_start:line_end].decode("utf-8", errors="replace").rstrip("\r")
        raise ConfigParseError(str(path), line_number, line, "invalid UTF-8 byte") from exc
    return parse_properties(text, source=str(path))
