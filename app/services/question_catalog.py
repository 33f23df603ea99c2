# app/services/question_catalog.py
"""Textos fijos de las preguntas por tipo de cuestionario.

La clave de cada respuesta almacenada es el índice (base 0) en esta lista.
"""
from __future__ import annotations

PERSONALIDAD_QUESTIONS: tuple[str, ...] = (
    "¿Conectas fácilmente con gente nueva?",
    "¿Te resulta fácil establecer conversación con un desconocido?",
    "¿Te sientes más cómodo estando solo que en grupo?",
    "¿Socializar puede agotar tu energía rápidamente?",
    "¿Prefieres las llamadas telefónicas a los mensajes de texto cuando te comunicas con otras personas?",
    "¿En situaciones sociales prefieres quedarte con caras conocidas antes que conocer a otras nuevas?",
    "¿Prefieres las actividades en solitario a las interacciones en grupo?",
    "¿Debatir y analizar obras creativas te apasiona?",
    "¿Te gustan las películas con conclusiones abiertas que permitan la interpretación?",
    "¿Siempre te han intrigado los misterios de la vida después de la muerte?",
    "¿Te encanta debatir conceptos teóricos y puedes pasarte horas conversando sobre ellos?",
    "¿A menudo reflexionas sobre el significado de las cosas en lugar de aceptarlas sin más?",
    "¿Te atraen las nuevas experiencias y te gusta explorar lugares desconocidos?",
    "¿Te gusta mantener conversaciones profundas que inviten a la reflexión?",
    "¿Reflexionar sobre experiencias pasadas te ayuda a comprender tus creencias y valores actuales?",
    "¿Disfrutas aprendiendo nuevas ideas y conceptos, buscando constantemente el conocimiento?",
    "¿Te gustan los debates animados en los que puedes compartir e intercambiar ideas con los demás?",
    "¿La curiosidad te impulsa a explorar nuevas ideas y temas en profundidad?",
    "¿Puedes pasarte horas profundizando en los temas que despiertan tu curiosidad?",
    "¿Eres paciente con las personas que no son tan rápidas o eficientes como tú?",
    "¿Cuándo alguien a tu alrededor está disgustado tiendes a sentir también sus emociones?",
    "¿Te cuesta empatizar con personas de orígenes muy diferentes?",
    "¿Cuándo alguien piensa de forma diferente a ti, intentas comprender de verdad a la otra parte?",
    "¿Valoras la honestidad por encima del tacto, aunque sea duro?",
    "¿Empatizas con los sentimientos de los demás, aunque no hayas compartido sus experiencias?",
    "¿Alcanzar metas personales te produce más satisfacción que ayudar a los demás?",
    "¿A veces te cuesta entender las emociones de los demás?",
    "¿Sueles hacer planes de emergencia?",
    "¿Mantienes la compostura incluso bajo presión?",
    "¿Los entornos dinámicos y de ritmo rápido te dan energía y te desenvuelves bien bajo presión?",
    "¿Te gustan los retos, especialmente en entornos de alta presión?",
    "¿En situaciones sociales prefieres quedarte con caras conocidas antes que conocer a otras nuevas?",
    "¿Un pequeño error a veces puede hacer dudar de tus conocimientos generales sobre un tema?",
    "¿Conocer gente nueva te hace preocuparte por la impresión que has causado?",
    "¿Con frecuencia te preocupa el peor escenario posible en cualquier situación?",
    "¿A menudo consideras las decisiones que has tomado?",
    "¿La inseguridad es algo con lo que lidias a menudo?",
    "¿Los errores de tu pasado suelen perdurar en la memoria?",
    "¿A menudo te preocupan incertidumbres futuras, incluso en situaciones tranquilas?",
    "¿Eres una persona que aprecia los recuerdos y los objetos sentimentales?",
    "¿Crees que el mundo mejoraría si la gente tomara decisiones más basadas en las emociones?",
    "¿Te molesta que los demás discutan delante de ti?",
    "¿Te gusta organizar tu día con listas y horarios?",
    "¿Prefieres seguir una rutina a ser espontáneo?",
    "¿Te sientes más a gusto cuando tu entorno está ordenado y organizado?",
    "¿A menudo sigues tus sentimientos más que tu lógica?",
    "¿Cuándo tienes que elegir sigues a tu corazón y eliges lo que te parece correcto?",
    "¿Te identificas mucho con ser una persona artística?",
    "¿Te gusta pasar tiempo en museos de arte?",
    "¿Te gusta mantener conversaciones profundas que inviten a la reflexión?",
    "¿La curiosidad te impulsa a explorar nuevas ideas y temas en profundidad?",
    "¿Te gusta ser el centro de atención?",
    "¿Prefieres una rutina diaria bien estructurada y te sientes más cómodo cuando las cosas son predecibles?",
    "¿Prefieres relajarte antes de ocuparte de las tareas domésticas?",
    "¿Prefieres tomar decisiones rápidamente en lugar de pensar en ellas?",
    "¿Confías más en tu instinto que en horarios o planes escritos?",
    "¿Te adaptas fácilmente a los cambios inesperados de planes?",
    "¿A la hora de tomar decisiones, priorizas la lógica y la objetividad sobre las emociones?",
    "¿Tomas las riendas de forma natural en situaciones de grupo guiando a los demás hacia objetivos comunes?",
    "¿Te gusta asumir funciones de liderazgo?",
    "¿Tiendes a ser autocrítico, a reflexionar constantemente sobre tus acciones y a esforzarte por mejorar?",
    "¿Para ti es importante tener objetivos claros y trabajar diligentemente para alcanzarlos?",
    "¿Pasar tiempo a solas es algo que aprecias y encuentras paz en las actividades solitarias?",
    "¿Eres tu mejor amigo?",
    "¿Cómo te gusta pasar tu tiempo libre? (Hobbies)",
    "¿Tienes alguna alergia, fobia o algo que deberíamos tener en cuenta para la cita?",
)

PAREJA_QUESTIONS: tuple[str, ...] = (
    "¿Qué buscas principalmente en una relación?",
    "¿Cómo prefieres pasar tiempo con tu pareja?",
    "¿Qué valoras más en una persona?",
    "¿Cómo manejas los conflictos en una relación?",
    "¿Qué te gustaría mejorar en ti mismo para una relación?",
    "¿Qué tan importante es la comunicación en una relación para ti?",
    "¿Cómo te sientes cuando tu pareja necesita espacio personal?",
    "¿Qué tan importante es la confianza en una relación?",
    "¿Cómo reaccionas cuando tu pareja tiene éxito?",
    "¿Qué tan importante es la compatibilidad sexual?",
    "¿Cómo manejas los celos en una relación?",
    "¿Qué tan importante es compartir valores en una relación?",
    "¿Cómo te sientes cuando tu pareja tiene amigos del sexo opuesto?",
    "¿Qué tan importante es la independencia financiera en una relación?",
    "¿Cómo manejas las diferencias de opinión con tu pareja?",
    "¿Qué tan importante es la compatibilidad de horarios y estilo de vida?",
    "¿Cómo te gustaría que sea tu relación ideal?",
)

QUESTIONS_BY_TYPE: dict[str, tuple[str, ...]] = {
    "pareja": PAREJA_QUESTIONS,
    "personalidad": PERSONALIDAD_QUESTIONS,
}


def question_text(questionnaire_type: str, key: str) -> str:
    """Texto de la pregunta ``key`` o ``"Pregunta {n}"`` si no está en el catálogo.

    Las claves no numéricas o negativas se devuelven tal cual.
    """
    try:
        index = int(key)
    except (TypeError, ValueError):
        return str(key)
    if index < 0:
        return str(key)
    questions = QUESTIONS_BY_TYPE.get(questionnaire_type, ())
    if 0 <= index < len(questions):
        return questions[index]
    return f"Pregunta {index + 1}"
