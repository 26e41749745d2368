"""Inkwell: blogging backend with session auth, ownership checks and like/comment transitions."""
