"""
입력 스키마 검증 유틸리티 모듈

도구의 inputSchema(JSON Schema의 object 형태)에 맞춰 호출 인자를 검사합니다.
첫 번째 위반을 찾는 즉시 멈추는 fail-fast 방식입니다.
"""

from typing import Any, Dict, Mapping, Optional

# JSON Schema 타입 이름 → 파이썬 검사 함수
# bool은 int의 하위 클래스이므로 숫자 타입에서 명시적으로 제외합니다.
_TYPE_CHECKS = {
    "string": lambda v: isinstance(v, str),
    "integer": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "object": lambda v: isinstance(v, dict),
    "array": lambda v: isinstance(v, list),
    "null": lambda v: v is None,
}


def describe_type(value: Any) -> str:
    """값의 JSON 타입 이름을 돌려줍니다(오류 메시지용)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


def matches_type(value: Any, declared: Any) -> bool:
    """value가 선언된 타입(문자열 또는 문자열 리스트)에 맞는지 확인합니다.

    알 수 없는 타입 이름이나 타입 선언이 없는 경우는 통과로 봅니다.
    """
    if declared is None:
        return True
    names = declared if isinstance(declared, list) else [declared]
    for name in names:
        check = _TYPE_CHECKS.get(name)
        if check is None or check(value):
            return True
    return False


def first_violation(arguments: Any, schema: Mapping[str, Any]) -> Optional[str]:
    """
    인자 묶음에서 첫 번째 스키마 위반을 찾아 메시지로 반환합니다.

    매개변수(Parameters):
        arguments (Any): 클라이언트가 보낸 인자 (dict 여야 함)
        schema (Mapping): 도구의 inputSchema

    반환값(Returns):
        Optional[str]: "<파라미터>: <이유>" 형태의 메시지, 위반이 없으면 None

    검사 순서:
        1. 인자 자체가 object(dict)인지
        2. required 에 나열된 파라미터가 모두 있는지 (선언 순서대로)
        3. 넘어온 각 파라미터가 선언된 타입과 맞는지
        4. additionalProperties 가 false 이면 선언되지 않은 파라미터가 없는지
    """
    if not isinstance(arguments, dict):
        return f"arguments: expected object, got {describe_type(arguments)}"

    properties: Dict[str, Any] = schema.get("properties") or {}

    for name in schema.get("required") or []:
        if name not in arguments:
            return f"{name}: required parameter is missing"

    allow_extra = schema.get("additionalProperties", True) is not False
    for name, value in arguments.items():
        prop = properties.get(name)
        if prop is None:
            if not allow_extra:
                return f"{name}: unexpected parameter"
            continue
        declared = prop.get("type") if isinstance(prop, dict) else None
        if not matches_type(value, declared):
            expected = " | ".join(declared) if isinstance(declared, list) else declared
            return f"{name}: expected {expected}, got {describe_type(value)}"

    return None
