class FurnaceError(Exception):
    # Base class for every failure the scene layer reports explicitly.
    # All of these are programming / configuration errors raised at construction time,
    # never transient conditions, so nothing in the package retries on them.
    pass

class DegenerateQuaternion(FurnaceError):
    # Raised when normalising a quaternion whose norm is zero (or not finite).
    pass

class DegenerateOrbit(FurnaceError):
    # Raised when the camera eye coincides with the focus, or sits directly above/below it,
    # so the orbital and azimuthal angles cannot be derived.
    pass

class InvalidCameraPlanes(FurnaceError, ValueError):
    # near <= 0 or near >= far: the projection matrix would be singular.
    pass

class InvalidFieldOfView(FurnaceError, ValueError):
    # Field of view outside the open interval (0, 180) degrees.
    pass

class InvalidViewport(FurnaceError, ValueError):
    # Framebuffer width or height is not strictly positive.
    pass

class MeshIndexOutOfRange(FurnaceError, IndexError):
    # A mesh index references a vertex that does not exist.
    pass

class InvalidAtomSize(FurnaceError, ValueError):
    # Atom size must be a finite, strictly positive scale factor.
    pass

class BackendError(FurnaceError, RuntimeError):
    # The rendering backend failed (shader compilation, buffer creation, missing shader files).
    # Fatal: the renderer aborts scene construction.
    pass
