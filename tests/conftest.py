import base64

import pytest

# Real AMF3-wrapped legacy templates: two subjects, dlib (16) and ArcFace (24) versions
LEGACY_TEMPLATES = {
    "subject1": [
        "CgsBC3Byb3RvDIIZEAAQAYAAAABGabc4FUFGSdxP4USmRTktyNPeCTAhwSUZ3Mq/ASI7zj2nFLsx8dLPswk6otFAPeIQJ9lgJbInJVx/Lqgz79E2ssRBOrDF7kDSAVI5Js0dN7Q/vsdc0MzkL78G2bbRQzkv5fNSA+1MVw2t8ZgvPRFPxNcmTj3mfTSo+yzlG7wpq9StziYJdXVpZAwhgNp9OEzMcORFlGzYez1zrAE=",
        "CgsBC3Byb3RvDIIZEAAQAYAAAAAAfrE4HzAgNIBU2Q6lVkj7wBS/Eu42tx4rvR7M8B0xzGaBE6f1wcuwtdVBu+BYM8kpMuNMFsgcEXJKJc8lA+A7BvZLIsG+J0vlPD7vIeg/Cec0q70s17i7NrTy6aqpXFVA2yQ6vRZXPPq3PJY4K+9Czt4iLjrYbzWc1icBLBRDsMqhyzMJdXVpZAwhbQESeTuJUDEpsoeC66G+FwE=",
        "CgsBC3Byb3RvDIIZEAAQAYAAAABhxM44Thf7Ew9d6e0i+R1RzSj1CwoyxMIMB9Hx1Wbu9VK+wbQx/AjI1OVK7A9BT9Ub7QpGR+Aj+V5mLIDPLDVf480iVLvc4BHwI0Mw8OFEHPQ5yuQ36vHaIBcSIvb6PUgmJe5N1csbIgvJOq4FRyI4shoEaUneTBLB7RvvL8Q1vcC5LSMJdXVpZAwhSIUACdvEny4HeBjhUSgFgwE=",
        "CgsBC3Byb3RvDIIZGAAQAYAAAADZtMo616TpgEG6sg0/CYlZ4M85uQfJwS8HuMg7oOkE28wlLbkh9OBXBlsrYuEH4wm3luzVuk4cps3YtkjJUiTp6R8+OtI3G6E/FB0Lng/LKablO7TXFb3y7VAu/d0RYC3BLvy1XJ7W9foYz0/QuSzcSgU5kBQTwLYxaUCY3FDH0PJTBbYJdXVpZAwh3geQw7/S2nBtHvbCde5sFgE=",
    ],
    "subject2": [
        "CgsBC3Byb3RvDIIZGAAQAYAAAAA1fqo6NsnjqZifFVPg0CKlmk0wtu1bJ9rQ/0mvX8AYjyo5KxRPOTpTfy3nlftLOKReMKkRxp0a0Cv7A0xYIzf80lLFIbcKKMj21FE+1cxLIjXOVzrBtOoiF7hn+eEyHN3URdkTja4xc6sTZiPUUrcTAu/m1MY0JNguLR8trS3VxTrWp2kJdXVpZAwhqs8iJmqSX5dTH7Qqk2t/oQE=",
    ],
}


@pytest.fixture
def legacy_b64():
    return [b64 for templates in LEGACY_TEMPLATES.values() for b64 in templates]


@pytest.fixture
def legacy_templates(legacy_b64):
    return [base64.b64decode(b64) for b64 in legacy_b64]


@pytest.fixture
def v16_template(legacy_templates):
    return legacy_templates[0]


@pytest.fixture
def v24_template(legacy_templates):
    return legacy_templates[3]
