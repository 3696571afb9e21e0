"""HR console package.

This package is organized by feature modules (requests, revenue, ...) on top of
a shared record-table engine (tables, filters) with a thin Flask controller layer.
"""
