"""OpenGL model viewer with a fly-through camera, OBJ/MTL loading and a toy ECS."""

__version__ = "0.1.0"
__all__ = ["camera", "shader", "mesh", "objloader", "model", "input", "app", "ecs"]