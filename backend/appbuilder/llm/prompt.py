INSTRUCTION_TEMPLATE = (
    'You are an AI that outputs a single JSON object containing "code" as a string. '
    "Only output valid JSON. Generate code for: {prompt}"
)


def build_instruction(prompt: str) -> str:
    return INSTRUCTION_TEMPLATE.format(prompt=prompt)


def build_messages(prompt: str) -> list:
    return [
        {
            "role": "user",
            "content": build_instruction(prompt),
        }
    ]
