"""
Excel 导出工具
"""
from io import BytesIO
from typing import Any, Dict, List
from urllib.parse import quote

import pandas as pd
from fastapi.responses import StreamingResponse

XLSX_MEDIA_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


class ExcelUtil:
    """按 {字段名: 列标题} 映射把数据导出为 xlsx"""

    @classmethod
    def to_dataframe(cls, rows: List[Dict[str, Any]], mapping: Dict[str, str]) -> pd.DataFrame:
        """
        构造只包含映射列的 DataFrame，列顺序与映射一致

        Args:
            rows: 数据字典列表
            mapping: 字段名 -> 列标题

        Returns:
            DataFrame
        """
        data = [{title: row.get(field) for field, title in mapping.items()} for row in rows]
        return pd.DataFrame(data, columns=list(mapping.values()))

    @classmethod
    def to_bytes(cls, rows: List[Dict[str, Any]], mapping: Dict[str, str], sheet_name: str = 'Sheet1') -> bytes:
        output = BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            cls.to_dataframe(rows, mapping).to_excel(writer, index=False, sheet_name=sheet_name)
        return output.getvalue()

    @classmethod
    def export_response(cls, rows: List[Dict[str, Any]], mapping: Dict[str, str],
                        filename: str, sheet_name: str = 'Sheet1') -> StreamingResponse:
        """
        生成 xlsx 下载响应

        Args:
            rows: 数据字典列表
            mapping: 字段名 -> 列标题
            filename: 下载文件名（不含扩展名）
            sheet_name: 工作表名

        Returns:
            StreamingResponse
        """
        content = BytesIO(cls.to_bytes(rows, mapping, sheet_name))
        return StreamingResponse(
            content,
            media_type=XLSX_MEDIA_TYPE,
            headers={
                'Content-Disposition': f"attachment; filename*=UTF-8''{quote(filename)}.xlsx"
            }
        )
