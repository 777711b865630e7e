# ledgermatch/__init__.py
