"""
The VIEW layer: PySide6 widgets that render snapshots and forward user input
to the playback controller. Widgets never compute intensities themselves.
"""
