"""
控制器通用工具
"""
from typing import List

from backoffice.core.exceptions import BadRequest


def parse_ids(ids: str) -> List[int]:
    """
    解析逗号分隔的ID串，如 "1,2,3"

    Raises:
        BadRequest: 含非数字项或为空
    """
    try:
        result = [int(item) for item in ids.split(",") if item.strip()]
    except ValueError:
        raise BadRequest(f"ID格式不正确: {ids}")
    if not result:
        raise BadRequest("ID不能为空")
    return result
