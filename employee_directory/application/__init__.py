"""
Application layer: casos de uso del directorio + tareas de arranque (seed).
"""
