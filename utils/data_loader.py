"""
測試資料載入器
從 test_data/ 目錄載入 JSON 測試資料，搭配 pytest.mark.parametrize 做資料驅動測試。

用法：
    from utils.data_loader import load_json, get_test_ids

    LOGIN_DATA = load_json("login_data.json")

    @pytest.mark.parametrize("case", LOGIN_DATA, ids=get_test_ids(LOGIN_DATA))
    def test_login(case):
        ...
"""

import json
from pathlib import Path

DATA_DIR = Path(__file__).resolve().parent.parent / "test_data"


def load_json(filename: str) -> list[dict]:
    """從 JSON 檔載入測試資料"""
    filepath = DATA_DIR / filename
    with open(filepath, "r", encoding="utf-8") as f:
        return json.load(f)


def get_test_ids(data: list[dict], key: str = "case_id") -> list[str]:
    """從測試資料中提取 case_id 作為 pytest 的 test ID"""
    return [item.get(key, str(i)) for i, item in enumerate(data)]


def find_case(data: list[dict], case_id: str, key: str = "case_id") -> dict:
    """依 case_id 取出單筆測試資料，找不到時拋出 KeyError"""
    for item in data:
        if item.get(key) == case_id:
            return item
    raise KeyError(f"找不到測試資料: {case_id}")
