"""Chat routes - stateless question answering."""

from fastapi import APIRouter

from apps.chat.handlers import analyze_attachment, ask_question

router = APIRouter(prefix="/chat", tags=["Chat"])

# POST /chat/ask - Answer a question in the selected mode
router.post("/ask")(ask_question)

# POST /chat/attachment - Answer a question about a file
router.post("/attachment")(analyze_attachment)
