"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "레일리 하늘 시뮬레이터",
        "en": "Rayleigh Sky Simulator",
    },
    "subtitle": {
        "ko": "빛의 산란을 직접 움직여 보는 시뮬레이션",
        "en": "Interactive Light Scattering Demonstration",
    },
    "physics_reference": {
        "ko": "물리 참고자료",
        "en": "Physics Reference",
    },
    "badge_time": {
        "ko": "시간대: {phase}",
        "en": "Time: {phase}",
    },
    "phase_Sunrise": {
        "ko": "일출",
        "en": "Sunrise",
    },
    "phase_Morning": {
        "ko": "오전",
        "en": "Morning",
    },
    "phase_Midday": {
        "ko": "한낮",
        "en": "Midday",
    },
    "phase_Afternoon": {
        "ko": "오후",
        "en": "Afternoon",
    },
    "phase_Sunset": {
        "ko": "일몰",
        "en": "Sunset",
    },
    "hint_slider": {
        "ko": "아래 슬라이더를 움직여 태양을 옮겨보세요",
        "en": "Drag the slider below to move the sun",
    },
    "slider_label": {
        "ko": "태양 각도",
        "en": "Sun angle",
    },
    "slider_sunrise": {
        "ko": "☀ 일출 (0°)",
        "en": "☀ Sunrise (0°)",
    },
    "slider_noon": {
        "ko": "정오 (90°)",
        "en": "Noon (90°)",
    },
    "slider_sunset": {
        "ko": "☾ 일몰 (180°)",
        "en": "☾ Sunset (180°)",
    },
    # Drawn into the frame by matplotlib, whose bundled DejaVu Sans has no
    # Hangul glyphs; Korean text would render as empty boxes
    "canvas_atmosphere": {
        "ko": "Atmosphere Top",
        "en": "Atmosphere Top",
    },
    "canvas_observer": {
        "ko": "Observer",
        "en": "Observer",
    },
    "chart_title": {
        "ko": "산란 세기",
        "en": "Scattering Intensity",
    },
    "chart_caption": {
        "ko": "파란빛은 빨간빛보다 약 4배 강하게 산란돼요 (I ∝ 1/λ⁴)",
        "en": "Blue light scatters ~4x more strongly than red light (I ∝ 1/λ⁴)",
    },
    "conditions_title": {
        "ko": "대기 조건",
        "en": "Atmospheric Conditions",
    },
    "label_elevation": {
        "ko": "태양 고도",
        "en": "Sun Elevation",
    },
    "label_path": {
        "ko": "대기 통과 거리",
        "en": "Atmosphere Path",
    },
    "label_path_note": {
        "ko": "정오 대비",
        "en": "Relative to noon",
    },
    "formula_caption": {
        "ko": "레일리 산란 공식",
        "en": "Rayleigh Scattering Formula",
    },
    "ai_title": {
        "ko": "AI 물리학자에게 물어보기",
        "en": "Ask the AI Physicist",
    },
    "ai_intro": {
        "ko": "색이 왜 이렇게 크게 바뀌는지 궁금하다면, 지금 시뮬레이션 상태를 AI에게 분석해달라고 해보세요.",
        "en": "Curious why the color shifts so dramatically? Ask the AI to analyze the current simulation parameters.",
    },
    "btn_explain": {
        "ko": "지금 화면 설명하기",
        "en": "Explain Current View",
    },
    "btn_refresh": {
        "ko": "설명 새로고침",
        "en": "Refresh Explanation",
    },
    "loading_explanation": {
        "ko": "빛의 경로를 분석하는 중...",
        "en": "Analyzing light paths...",
    },
    "explanation_offline": {
        "ko": "시뮬레이션이 오프라인 모드로 실행 중이에요. AI 설명을 보려면 환경 변수에 ANTHROPIC_API_KEY를 설정하세요.",
        "en": "Simulation is running in offline mode. AI explanations require a valid ANTHROPIC_API_KEY in the environment variables.",
    },
    "explanation_error": {
        "ko": "AI 물리학자가 지금은 자리에 없어요. 연결 상태와 API 키를 확인해주세요.",
        "en": "The AI physicist is currently offline. Please check your connection and API key.",
    },
    "explanation_empty": {
        "ko": "지금은 설명을 만들 수 없어요.",
        "en": "Unable to generate explanation at the moment.",
    },
    "instructions_title": {
        "ko": "사용 방법",
        "en": "Instructions",
    },
    "instructions_body": {
        "ko": (
            "- **슬라이더**로 하루 중 시간(태양 각도)을 바꿔보세요.\n"
            "- **하늘 색**이 파랑에서 빨강/주황으로 바뀌는 것을 관찰하세요.\n"
            "- **산란 세기** 차트에서 파란빛이 빨간빛보다 4배 더 산란되는 것을 확인하세요.\n"
            "- 태양이 낮아질수록 **대기 통과 거리** 값이 커지는 것에 주목하세요."
        ),
        "en": (
            "- Use the **Slider** to change the time of day (Sun Angle).\n"
            "- Observe the **Sky Color** change from blue to red/orange.\n"
            "- Look at the **Scattering Intensity** chart to see how blue light scatters 4x more than red.\n"
            "- Note the **Atmosphere Path** value increasing as the sun gets lower."
        ),
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
