"""
Excel generation utilities for the leave report.
"""

import io
from typing import Any, Dict, List, Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.utils.dataframe import dataframe_to_rows


class ExcelGenerator:
    """Main Excel generation utilities"""

    def __init__(self):
        self.workbook: Optional[Workbook] = None
        self.default_styles = self._create_default_styles()

    def _create_default_styles(self) -> Dict[str, Dict[str, Any]]:
        """Create default cell styles"""
        thin = Side(style='thin')
        return {
            'header': {
                'font': Font(bold=True, color='FFFFFF'),
                'fill': PatternFill(start_color='366092', end_color='366092', fill_type='solid'),
                'alignment': Alignment(horizontal='center', vertical='center'),
                'border': Border(left=thin, right=thin, top=thin, bottom=thin),
            },
            'data': {
                'font': Font(size=10),
                'alignment': Alignment(horizontal='left', vertical='center'),
                'border': Border(left=thin, right=thin, top=thin, bottom=thin),
            },
        }

    def create_workbook(self) -> Workbook:
        """Create a new Excel workbook"""
        self.workbook = Workbook()
        # Remove default sheet
        self.workbook.remove(self.workbook.active)
        return self.workbook

    def add_dataframe_sheet(self, name: str, df: pd.DataFrame) -> str:
        """
        Add a worksheet holding a DataFrame: styled header row from the
        column names, one row per record, auto-sized columns.
        """
        if not self.workbook:
            self.create_workbook()

        ws = self.workbook.create_sheet(title=name)

        for row in dataframe_to_rows(df, index=False, header=True):
            ws.append(row)

        for cell in ws[1]:
            self._apply_style(cell, self.default_styles['header'])

        for row in ws.iter_rows(min_row=2):
            for cell in row:
                self._apply_style(cell, self.default_styles['data'])

        self._auto_adjust_columns(ws)
        return name

    def _apply_style(self, cell, style_dict: Dict[str, Any]):
        """Apply style to a cell"""
        for attr, value in style_dict.items():
            setattr(cell, attr, value)

    def _auto_adjust_columns(self, worksheet):
        """Auto-adjust column widths"""
        for column_cells in worksheet.columns:
            length = max(len(str(cell.value if cell.value is not None else '')) for cell in column_cells)
            worksheet.column_dimensions[get_column_letter(column_cells[0].column)].width = min(length + 2, 50)

    def to_bytes(self) -> bytes:
        """Serialize the workbook to xlsx bytes"""
        if not self.workbook:
            raise ValueError("No workbook to save")

        buffer = io.BytesIO()
        self.workbook.save(buffer)
        return buffer.getvalue()


def records_to_frame(records: List[Dict[str, Any]], columns: List[str]) -> pd.DataFrame:
    """Build a DataFrame with a fixed column order, even when empty."""
    return pd.DataFrame.from_records(records, columns=columns)
