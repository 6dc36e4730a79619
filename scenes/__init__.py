"""scenes package: pygame views that drive a ``CitySim`` from the keyboard."""
