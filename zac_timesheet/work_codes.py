"""
Work code → work division lookup.

The report form's division dropdown ("id_sagyou_naiyou<row>") takes one of
these option values. Codes not listed in config.yaml's `work_codes` are
entered as normal work.
"""

PROJECT = "1"
NORMAL_WORK = "2"


class WorkCategoryLookup:
    def __init__(self, mapping: dict = None, default: str = NORMAL_WORK):
        self._mapping = dict(mapping or {})
        self._default = default

    def category_for(self, code: str) -> str:
        return self._mapping.get(code, self._default)

    @staticmethod
    def is_project(category: str) -> bool:
        return category == PROJECT
