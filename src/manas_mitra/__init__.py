"""Manas Mitra: a wellness companion chat backend."""
