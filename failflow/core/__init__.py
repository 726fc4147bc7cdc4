# failflow/core/__init__.py
