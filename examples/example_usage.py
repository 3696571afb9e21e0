"""Ví dụ: dùng service layer (không qua Flask).

In trang đầu tiên của danh sách yêu cầu đang chờ xử lý ra terminal.
"""

import importlib

from config import get_settings_module

from src.hr_console.hr_console.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    listing = container.request_service.build_listing({"status": "Pending"})
    view = listing.view()

    print(" | ".join(h.label for h in view.table.headers))
    for row in view.table.rows:
        print(" | ".join(str(cell) for cell in row.cells))
    p = view.table.pagination
    print(f"Showing {p.first_item} to {p.last_item} of {p.total_items} results")


if __name__ == "__main__":
    main()
