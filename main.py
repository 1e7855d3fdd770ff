import moderngl_window as mglw
from furnace.renderer.molecule_renderer import MoleculeRenderer

if __name__ == "__main__":
    mglw.run_window_config(MoleculeRenderer)
    pass
