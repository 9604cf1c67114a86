"""Excel/CSV file parsing utilities."""
import pandas as pd
from io import BytesIO

from utils.seating_errors import InvalidHallFile


def parse_excel_file(file_content, filename):
    """
    Parse Excel or CSV file and return a list of dicts.
    Handles .csv, .xlsx, .xls files.
    """
    name = (filename or '').lower()
    try:
        if name.endswith('.csv'):
            df = pd.read_csv(BytesIO(file_content), encoding='utf-8')
        elif name.endswith('.xlsx'):
            df = pd.read_excel(BytesIO(file_content), engine='openpyxl')
        elif name.endswith('.xls'):
            df = pd.read_excel(BytesIO(file_content), engine='xlrd')
        else:
            raise InvalidHallFile(f"Unsupported file format: {filename}")
    except InvalidHallFile:
        raise
    except Exception as e:
        raise InvalidHallFile(f"Error parsing file: {str(e)}")

    df = df.dropna(how='all')
    df.columns = df.columns.astype(str).str.strip().str.lower().str.replace(' ', '_')
    return df.to_dict('records')


def _cell_int(value):
    if value is None or pd.isna(value) or str(value).strip() == '':
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return value


def parse_halls_file(file_content, filename, default_capacity=30, default_rows=6):
    """Parse exam hall import file. Expected: hall_name, capacity, rows, columns (optional).

    Returns hall payload dicts for the hall registry; geometry is validated
    there, not here.
    """
    records = parse_excel_file(file_content, filename)
    normalized = []
    for r in records:
        row = {k.strip().lower(): v for k, v in r.items()}
        hall_name = row.get('hall_name') or row.get('hall') or row.get('hall_number') or row.get('name')
        hall_name = '' if hall_name is None or pd.isna(hall_name) else str(hall_name).strip()
        if not hall_name:
            continue
        capacity = _cell_int(row.get('capacity'))
        rows = _cell_int(row.get('rows'))
        normalized.append({
            'hallName': hall_name,
            'capacity': default_capacity if capacity is None else capacity,
            'rows': default_rows if rows is None else rows,
            'columns': _cell_int(row.get('columns')),
        })
    if not normalized:
        raise InvalidHallFile("No valid hall records found. Ensure columns include hall_name and capacity.")
    return normalized
