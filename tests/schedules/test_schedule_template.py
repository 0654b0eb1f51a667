from __future__ import annotations

import io

import pandas as pd
import pytest

from presence_system.core.exceptions import ValidationError
from presence_system.schedules.template import build_template


def test_template_layout():
    content = build_template(2, 2024)

    df = pd.read_excel(io.BytesIO(content), header=None, dtype=object)
    assert df.iloc[3, 0] == "Employee No"
    assert df.iloc[3, 1] == "Name"
    assert list(df.iloc[3, 2:]) == list(range(1, 30))
    assert df.iloc[4, 0] == "001"


def test_template_imports_cleanly(container, repos):
    content = container.schedule_import_service.build_template(7, 2025)

    result = container.schedule_import_service.import_schedule(content, filename="template.xlsx", month=7, year=2025)

    # 31 days for each sample row, minus the four leave days of the second row.
    assert result.error_count == 0
    assert result.imported_count == 31 + 27
    assert repos.employees.get_by_id(1).default_shift_id == 1
    assert repos.employees.get_by_id(2).default_shift_id == 2


def test_template_rejects_bad_month(container):
    with pytest.raises(ValidationError):
        container.schedule_import_service.build_template(13, 2025)
