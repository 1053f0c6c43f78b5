import PyInstaller.__main__
import os

PyInstaller.__main__.run([
    'run.py',
    '--name=Sprite-Slicer',
    '--windowed',
    '--onefile',
    '--icon=NONE',
    f'--add-data=sprite_slicer{os.pathsep}sprite_slicer',
    '--collect-all=PIL',
    '--collect-all=PyQt6',
    '--noconfirm',
])
