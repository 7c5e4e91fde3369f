"""
repository.py - 로컬 JSON 저장소 (v1.0)

products_raw.json / products_optimized.json 읽기/쓰기.
파일 최상위는 항상 상품 객체 배열.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from ..core.exceptions import DataImportError, ErrorCodes

PathLike = Union[str, Path]


def load_json_array(file_path: PathLike) -> List[Any]:
    """JSON 배열 로드

    Raises:
        DataImportError: 파일 없음, JSON 파싱 실패, 배열이 아님
    """
    path = Path(file_path)
    if not path.exists():
        raise DataImportError(f"입력 파일이 없습니다: {path}", file_path=str(path))

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DataImportError(
            f"JSON 파싱 실패: {e.msg}",
            file_path=str(path),
            row_number=e.lineno,
            error_code=ErrorCodes.IMPORT_INVALID_FORMAT,
            cause=e
        )

    if not isinstance(data, list):
        raise DataImportError(
            "입력 파일은 상품 배열이어야 합니다.",
            file_path=str(path),
            error_code=ErrorCodes.IMPORT_INVALID_FORMAT
        )

    return data


def save_json_array(file_path: PathLike, data: List[Dict[str, Any]]) -> Path:
    """JSON 배열 저장 (UTF-8, 아랍어 그대로)"""
    path = Path(file_path)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    return path
