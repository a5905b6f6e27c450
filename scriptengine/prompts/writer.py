"""
Script Writer Prompts - Assembly Sections, Generation and Polish
Text blocks used to assemble the generator prompt and to request a polish pass.
"""

# ============================================================================
# Assembly Sections
# ============================================================================

ARCS_SECTION_HEADER = """## NARRATIVE ARCS FOR THIS SCRIPT

Weave the following narrative arcs into the script:"""

ARC_ENTRY = """**{name}**: {integration}
Key language: {key_language}"""

METAPHOR_SECTION = """## PRIMARY METAPHOR

Use the "{family}" metaphor family.
Primary images: {images}
Reason: {reason}
IMPORTANT: Maintain metaphor consistency - all imagery must fit within this one metaphor world."""

CORE_PRINCIPLES_HEADER = "=== CORE PRINCIPLES ==="
NARRATIVE_ARCS_HEADER = "=== NARRATIVE ARCS ==="
QUALITY_CHECKLIST_HEADER = "=== QUALITY CHECKLIST ==="

# ============================================================================
# Generation
# ============================================================================

SCRIPT_USER_PROMPT_TEMPLATE = """{client_context}

## Script Requirements

**Target Length:** approximately {target_words} words
**Emergence:** {emergence}

## Instructions

{instructions}

---

Write the complete hypnosis script now. Output the script text only: no headings, no commentary, no markdown."""

# ============================================================================
# Polish
# ============================================================================

POLISH_SYSTEM_PROMPT = """You are a hypnosis script polisher. Make minimal, surgical edits that fix the listed issues while preserving everything else.

## Rules

1. Change only the sentences that contain a listed issue
2. Keep the voice, pacing, metaphor and structure of the script
3. Replace cognitive instructions ("think about", "remember a time when") with direct experience ("Your body remembers...")
4. Replace visual-only commands with inclusive language ("Notice...", "Sense...")
5. Never add commentary

## Output Requirements

Return valid JSON only:

```json
{
  "polished_script": "The full corrected script text"
}
```"""

POLISH_USER_PROMPT_TEMPLATE = """## Issues To Fix

{issues}

## Script

{script}

---

Return the corrected script as JSON with a single "polished_script" field."""
