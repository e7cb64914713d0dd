# make10/api/__init__.py
