"""
Dimension Prompt Text - 8-Dimensional Emphasis Blocks
Tier guidance for each dimension plus the framing used around it.
"""

from typing import Dict, List, Tuple

DIMENSION_ORDER: List[str] = [
    "somatic",
    "temporal",
    "symbolic",
    "psychological",
    "perspective",
    "spiritual",
    "relational",
    "language",
]

# Sub-attributes rendered as labeled lines, in display order: (attribute, label)
DIMENSION_ATTRIBUTES: Dict[str, List[Tuple[str, str]]] = {
    "somatic": [("emphasis", "SOMATIC EMPHASIS"), ("techniques", "SOMATIC TECHNIQUES")],
    "temporal": [("work_types", "TEMPORAL WORK TYPES"), ("focus", "TEMPORAL FOCUS")],
    "symbolic": [("metaphor", "PRIMARY METAPHOR"), ("archetype", "ARCHETYPE")],
    "psychological": [("approaches", "PSYCHOLOGICAL APPROACHES"), ("depth", "PSYCHOLOGICAL DEPTH")],
    "perspective": [("primary_pov", "PRIMARY POV"), ("techniques", "PERSPECTIVE TECHNIQUES")],
    "spiritual": [("framework", "SPIRITUAL FRAMEWORK")],
    "relational": [("approaches", "RELATIONAL APPROACHES")],
    "language": [("style", "COMMUNICATION STYLE"), ("pacing", "PACING")],
}

DIMENSION_HEADER = "**{title} DIMENSION ({level}% emphasis)**"
SPIRITUAL_HEADER = "**SPIRITUAL DIMENSION ({level}% emphasis) - ENABLED**"

# ============================================================================
# Tier Guidance
# ============================================================================

DIMENSION_TIER_TEXT: Dict[str, Dict[str, List[str]]] = {
    "somatic": {
        "heavy": [
            "HEAVY body-based focus: breath, posture, temperature and physical sensation guide every phase",
            "Use extended body scanning, progressive softening and somatic anchoring",
            "Return to a felt sensation in every section of the script",
        ],
        "moderate": [
            "MODERATE body awareness: include breath work, body scanning and physical anchors",
            "Bring attention back to the body at regular intervals",
            "Use physical sensation to deepen the trance",
        ],
        "light": [
            "LIGHT body connection: mention breath and body awareness now and then",
            "Use physical sensations as subtle anchors",
            "Keep body references brief and gentle",
        ],
        "minimal": [
            "MINIMAL somatic content: a short body settling at the start only",
            "Give the other dimensions the space",
        ],
    },
    "temporal": {
        "heavy": [
            "HEAVY time-based work: extended regression, progression or timeline work",
            "Move through past resources, future pacing and time distortion",
            "Treat time as fluid and use that fluidity throughout",
        ],
        "moderate": [
            "MODERATE temporal work: include some regression or progression",
            "Draw on past learnings or future possibilities",
            "Use time as a therapeutic resource",
        ],
        "light": [
            "LIGHT temporal elements: occasional touches of past wisdom or the future self",
            "Brief timeline awareness",
            "Subtle time-based suggestions",
        ],
        "minimal": [
            "MINIMAL temporal content: stay mostly in the present moment",
            "Give the other dimensions the space",
        ],
    },
    "symbolic": {
        "heavy": [
            "HEAVY symbolic language: rich imagery, archetypal story and metaphor throughout",
            "Build a full symbolic journey through an inner landscape",
            "Weave mythic patterns and universal symbols",
        ],
        "moderate": [
            "MODERATE symbolic content: include metaphor, imagery and archetypal elements",
            "Use story-based suggestions",
            "Point toward symbolic meaning",
        ],
        "light": [
            "LIGHT symbolic touches: an occasional metaphor or image",
            "Brief symbolic references",
            "Subtle archetypal hints",
        ],
        "minimal": [
            "MINIMAL symbolic content: direct, literal language",
            "Give the other dimensions the space",
        ],
    },
    "psychological": {
        "heavy": [
            "HEAVY psychological work: engage deeply with beliefs, patterns and inner architecture",
            "Work with cognitive structures, parts and inner dialogue",
            "Explore unconscious patterns and mental frameworks at length",
        ],
        "moderate": [
            "MODERATE psychological engagement: work with beliefs and thought patterns",
            "Address mental models and the structures behind them",
            "Include some parts or subconscious work",
        ],
        "light": [
            "LIGHT psychological content: occasional belief reframing",
            "Brief references to thought patterns",
            "Subtle mental restructuring",
        ],
        "minimal": [
            "MINIMAL psychological content: stay experiential",
            "Give the other dimensions the space",
        ],
    },
    "perspective": {
        "heavy": [
            "HEAVY perspective shifting: move between many viewpoints",
            "Use dissociation, observer stance and role reversal",
            "Shift between first, second and third person perspectives",
        ],
        "moderate": [
            "MODERATE perspective work: include a few viewpoint shifts",
            "Use the observer position or an alternative perspective",
            "Let the situation be sensed from different angles",
        ],
        "light": [
            "LIGHT perspective shifts: an occasional change of viewpoint",
            "Brief observer stance",
            "Subtle reframing through perspective",
        ],
        "minimal": [
            "MINIMAL perspective work: keep the primary viewpoint",
            "Give the other dimensions the space",
        ],
    },
    "spiritual": {
        "heavy": [
            "HEAVY transpersonal work: deep connection to meaning, purpose and higher wisdom",
            "Reference universal consciousness, inner guides and sacred experience",
            "Draw on transcendent states and spiritual resources throughout",
        ],
        "moderate": [
            "MODERATE spiritual content: connect to purpose and meaning",
            "Reference the higher self or inner wisdom",
            "Include transpersonal elements",
        ],
        "light": [
            "LIGHT spiritual touches: occasional reference to meaning or purpose",
            "Brief connection to inner wisdom",
            "Subtle transpersonal elements",
        ],
        "minimal": [
            "MINIMAL spiritual content: a brief reference to personal meaning",
            "Keep spiritual elements very subtle",
        ],
    },
    "relational": {
        "heavy": [
            "HEAVY relational focus: relationships, connection and belonging throughout",
            "Address interpersonal dynamics and community",
            "Work with relationship patterns and felt connection",
        ],
        "moderate": [
            "MODERATE relational content: include relationship themes",
            "Reference connection with others",
            "Address interpersonal aspects",
        ],
        "light": [
            "LIGHT relational touches: occasional themes of connection",
            "Brief relationship references",
            "Subtle interpersonal elements",
        ],
        "minimal": [
            "MINIMAL relational content: keep the focus on the individual",
            "Give the other dimensions the space",
        ],
    },
    "language": {
        "heavy": [
            "HEAVY linguistic craft: advanced hypnotic language patterns throughout",
            "Use embedded suggestions, nested loops, presuppositions and ambiguity",
            "Choose every word with precision",
        ],
        "moderate": [
            "MODERATE linguistic attention: good hypnotic phrasing and pacing",
            "Include some embedded suggestions and language patterns",
            "Pay attention to word choice and rhythm",
        ],
        "light": [
            "LIGHT linguistic craft: basic hypnotic language",
            "Simple, clear suggestions",
            "Natural conversational flow",
        ],
        "minimal": [
            "MINIMAL linguistic craft: very simple, direct language",
            "Content matters more than pattern",
        ],
    },
}

# ============================================================================
# Framing
# ============================================================================

OVERALL_STYLE_LINE = "**OVERALL STYLE**: {style}"
ARCHETYPE_LINE = "**THERAPEUTIC ARCHETYPE**: {archetype} - embody this archetype's qualities"

GENERATION_RULE_LABELS: List[Tuple[str, str]] = [
    ("opening_style", "OPENING STYLE"),
    ("closing_style", "CLOSING STYLE"),
    ("voice_tone", "VOICE TONE"),
    ("pacing", "PACING"),
]

DIMENSION_SYSTEM_PROMPT_INTRO = """You are an expert hypnotherapist using the 8-Dimensional Hypnosis Framework.

You will generate hypnotic content following these EXACT dimensional instructions:"""

DIMENSION_CRITICAL_RULES = """**CRITICAL RULES**:
1. Follow the dimensional emphasis levels precisely - a higher percentage means MORE content in that dimension
2. Only include dimensions that have emphasis above 0
3. If the spiritual dimension is not enabled, do NOT include any spiritual content
4. Respect the specified style, archetype, metaphor, framework and techniques
5. Integrate all active dimensions into one flowing, coherent script
6. Match hypnotic language patterns to the language dimension level
7. The output should feel unified, not like separate dimension sections"""

CLIENT_CONTEXT_HEADER = "**CLIENT CONTEXT**:"
CLIENT_ISSUE_LINE = "**PRESENTING ISSUE**: {issue}"
CLIENT_OUTCOME_LINE = "**DESIRED OUTCOME**: {outcome}"
CLIENT_NOTES_LINE = "**ADDITIONAL NOTES**: {notes}"
