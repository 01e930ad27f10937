# Controllers package initialization
# One Blueprint per resource; main.create_app registers ALL_BLUEPRINTS

from .consulta_controller import consulta_bp
from .especialidade_controller import especialidade_bp
from .exame_controller import exame_bp
from .health_controller import health_bp
from .medico_controller import medico_bp
from .paciente_controller import paciente_bp
from .prontuario_controller import prontuario_bp
from .receita_controller import receita_bp

ALL_BLUEPRINTS = (
    health_bp,
    especialidade_bp,
    medico_bp,
    paciente_bp,
    consulta_bp,
    prontuario_bp,
    receita_bp,
    exame_bp,
)

__all__ = [
    "ALL_BLUEPRINTS",
    "health_bp",
    "especialidade_bp",
    "medico_bp",
    "paciente_bp",
    "consulta_bp",
    "prontuario_bp",
    "receita_bp",
    "exame_bp",
]
