# app/core/errors.py
"""Errores de dominio. Los endpoints los traducen a HTTPException."""
from __future__ import annotations


class DomainError(Exception):
    """Base de los errores de la capa de servicios."""


class InvalidType(DomainError):
    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Tipo de cuestionario inválido: {value!r}. Debe ser 'pareja' o 'personalidad'")


class NoSystemUser(DomainError):
    """No hay cuenta de sistema (admin) para asignar cuestionarios anónimos.

    Es una precondición de despliegue, no un error del usuario final.
    """

    def __init__(self, role: str):
        self.role = role
        super().__init__(f"No existe un usuario activo con rol '{role}' para cuestionarios anónimos")


class QuestionnaireNotFound(DomainError):
    def __init__(self, questionnaire_id: int):
        self.questionnaire_id = questionnaire_id
        super().__init__(f"Cuestionario {questionnaire_id} no encontrado")


class QuestionnaireLocked(DomainError):
    def __init__(self, questionnaire_id: int):
        self.questionnaire_id = questionnaire_id
        super().__init__(f"El cuestionario {questionnaire_id} ya está completado y no admite cambios")


class ContactMessageNotFound(DomainError):
    def __init__(self, message_id: int):
        self.message_id = message_id
        super().__init__(f"Mensaje {message_id} no encontrado")
