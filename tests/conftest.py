import os

# Los widgets se crean sin pantalla en las pruebas.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
