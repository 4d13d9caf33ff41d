# npz_writer/_internal/__init__.py
