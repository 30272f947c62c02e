"""
Web - Flask API and case library page

Routes:
    GET  /                  case library page
    GET  /health            health check
    GET  /status            case count and latest collection runs
    GET  /api/cases         list or search cases
    POST /api/chat          copilot chat
    GET  /api/chat/task     poll a background brainstorm
    POST /api/chat/task     start a background brainstorm
    POST /api/roi           ROI estimate
    GET  /api/cron/data     trigger collection + import
"""
import json
import uuid
from datetime import datetime
from threading import Thread

from flask import Flask, jsonify, render_template_string, request

from copilot import collector, config, data_persister, db, llm, rag, roi, tasks, workflows
from copilot.agents.base import AgentContext, AgentInput, ConversationMessage
from copilot.agents.orchestration import orchestration_agent
from copilot.samples import get_sample_cases

app = Flask(__name__)

START_TIME = datetime.now()

BRAINSTORM_KEYWORDS = [
    "new application", "new opportunit", "new scenario", "what's new", "innovation direction",
    "brainstorm", "inspiration", "discover new", "explore new", "trend direction",
    "new direction", "innovative case", "ai agent trend", "agent trends", "trends",
    "discover opportunit", "explore direction", "innovation",
]

HISTORY_LIMIT = 10

HOME_TEMPLATE = """
<html>
<head>
    <title>Sales Copilot</title>
    <style>
        body { font-family: Arial, sans-serif; background: #1a1a2e; color: #eee; padding: 40px; }
        .case { background: #16213e; padding: 16px 20px; border-radius: 10px; margin-bottom: 12px; max-width: 800px; }
        .meta { color: #9aa5b1; font-size: 13px; }
        .score { color: #00ff88; }
        a { color: #00d4ff; }
        h1 { color: #00d4ff; }
    </style>
</head>
<body>
    <h1>🤖 Sales Copilot</h1>
    <p>{{ cases|length }} cases{% if sample %} (sample data){% endif %}</p>
    {% for case in cases %}
    <div class="case">
        <h3><a href="{{ case.source_url }}">{{ case.project_name }}</a></h3>
        <p>{{ case.outcome or case.description or '' }}</p>
        <p class="meta">
            {{ case.industry }} · {{ case.use_case }} · {{ case.source }}
            · <span class="score">{{ '%.2f'|format(case.quality_score or 0) }}</span>
        </p>
        <p class="meta">{{ (case.technology or [])|join(', ') }}</p>
    </div>
    {% endfor %}
</body>
</html>
"""


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _int_arg(name: str, default: int) -> int:
    try:
        return int(request.args.get(name, default))
    except (TypeError, ValueError):
        return default


# ============ Pages ============

@app.route("/")
def home():
    """Case library page."""
    try:
        cases = db.get_cases(limit=50)
    except Exception as e:
        print(f"⚠️ [WEB] Case list unavailable: {e}")
        cases = []

    sample = not cases
    if sample:
        cases = get_sample_cases()
    return render_template_string(HOME_TEMPLATE, cases=cases, sample=sample)


@app.route("/health")
def health():
    return jsonify({
        "status": "healthy",
        "uptime_seconds": int((datetime.now() - START_TIME).total_seconds()),
        "service": "sales-copilot",
    })


@app.route("/status")
def status():
    try:
        return jsonify({
            "start_time": START_TIME.isoformat(),
            "uptime_seconds": int((datetime.now() - START_TIME).total_seconds()),
            "case_count": db.get_case_count(),
            "collection_logs": db.get_collection_logs(limit=5),
        })
    except Exception as e:
        print(f"❌ [WEB] Status error: {e}")
        return _error(str(e), 500)


# ============ Cases ============

@app.route("/api/cases")
def list_cases():
    industry = request.args.get("industry")
    use_case = request.args.get("useCase")
    keyword = request.args.get("keyword")
    limit = _int_arg("limit", 20)
    offset = _int_arg("offset", 0)

    try:
        if keyword:
            data = db.search_cases(keyword, limit)
        else:
            data = db.get_cases(industry=industry, use_case=use_case, limit=limit, offset=offset)
    except Exception as e:
        print(f"❌ [WEB] Cases error: {e}")
        return _error(str(e) or "Internal server error", 500)

    if not data:
        samples = get_sample_cases()
        return jsonify({
            "data": samples,
            "total": len(samples),
            "message": "Using sample data (case library is empty)",
        })

    return jsonify({"data": data, "total": len(data)})


# ============ Chat ============

def detect_mode(message: str) -> str | None:
    """'brainstorm' when the message asks for new directions, else None."""
    lowered = message.lower()
    for keyword in BRAINSTORM_KEYWORDS:
        if keyword in lowered:
            print(f"   [WEB] Auto intent matched: {keyword}")
            return "brainstorm"
    return None


def handle_brainstorm(message: str, industry: str = None) -> dict:
    response = rag.agent_rag(message, mode="brainstorm", industry=industry,
                             include_types=("case", "scenario", "trend"))
    if response.retrieved_count:
        note = f"Answer based on {response.retrieved_count} related records from the case library"
    else:
        note = "No related records in the case library, answering from general knowledge"
    return {
        "type": "brainstorm",
        **response.to_dict(),
        "retrievedCount": response.retrieved_count,
        "message": note,
    }


def handle_agent(message: str, session_id: str, industry: str = None) -> dict:
    history = [
        ConversationMessage(role=m["role"], content=m["content"])
        for m in db.get_conversation_history(session_id, limit=HISTORY_LIMIT)
    ]
    output = orchestration_agent.execute(AgentInput(
        task=message,
        context=AgentContext(session_id=session_id, conversation_history=history),
        params={"industry": industry} if industry else {},
    ))
    if not output.success:
        raise RuntimeError(output.error)

    result = output.data
    return {
        "type": "agent",
        "answer": result.final_output,
        "intent": result.intent.intent.value,
        "confidence": result.intent.confidence,
        "entities": result.intent.entities,
        "tasks": [
            {"agent": t.agent_name, "task": t.task, "success": t.success, "duration": t.duration}
            for t in result.tasks
        ],
    }


def handle_chat(message: str) -> str:
    """Canned replies for the plain chat mode."""
    lowered = f" {message.lower()} "

    if "customer service" in lowered:
        return """Here are AI agent cases for customer service:

**Popular cases:**

1. **ChatGPT-Next-Web** - one-click private ChatGPT deployment, fits support teams
2. **LangChain** - framework for LLM apps with conversational agents
3. **Dify** - production-grade agent workflow platform

Want details on one of them, or a sales script for it?"""

    if "automation" in lowered:
        return """Here are AI agent cases for process automation:

**Popular cases:**

1. **AutoGPT** - autonomous agent for multi-step tasks
2. **HyperAgent** - AI driven browser automation
3. **OpenAdapt** - generative process automation

These help companies automate repetitive work and raise efficiency."""

    if any(greeting in lowered for greeting in (" hello", " hi ", " hi!", " hey ")):
        return """Hello! I'm Sales Copilot, your AI agent assistant.

I can help you:
- 🔍 Search AI agent success cases
- 📝 Write sales scripts
- 💰 Estimate ROI
- 💡 Suggest where AI fits in a business

What can I do for you?"""

    return f"""Thanks for your question! For "{message}" I suggest:

1. Search the case library above for related keywords
2. Open a case that looks relevant
3. Ask me for a sales script for that case

Tell me more about what you need and I can be more specific."""


def _reply_text(result) -> str:
    """Text stored as the assistant turn of the conversation."""
    if isinstance(result, str):
        return result
    if isinstance(result, dict):
        if result.get("answer") or result.get("message"):
            return str(result.get("answer") or result.get("message"))
        script = result.get("sales_script")
        if isinstance(script, dict) and script.get("script"):
            return script["script"]
    return json.dumps(result, ensure_ascii=False, default=str)


@app.route("/api/chat", methods=["POST"])
def chat():
    body = request.get_json(silent=True) or {}
    message = body.get("message")
    mode = body.get("mode")
    case_info = body.get("caseInfo")
    customer_industry = body.get("customerIndustry")
    session_id = body.get("sessionId") or str(uuid.uuid4())

    if message is not None and not isinstance(message, str):
        return _error("message must be a string", 400)
    if not message and not case_info:
        return _error("Missing required fields: message or caseInfo", 400)

    resolved = mode or (detect_mode(message) if message else None) or "chat"

    try:
        if resolved == "brainstorm":
            result = handle_brainstorm(message, customer_industry)

        elif resolved == "sales_script":
            if not case_info or not customer_industry:
                return _error("caseInfo and customerIndustry are required for sales_script mode", 400)
            flow = workflows.run_sales_script_flow(
                customer={
                    "industry": customer_industry,
                    "size": body.get("customerCompanySize"),
                    "role": body.get("customerRole"),
                },
                case_info=case_info,
                script_type=body.get("scriptType") or "cold_call",
            )
            if not flow["success"]:
                return _error(flow["error"], 500)
            result = flow["data"]

        elif resolved == "extract_info":
            result = llm.extract_case_info(message or "")
            if not result:
                return _error("Failed to extract case info", 500)

        elif resolved == "agent":
            result = handle_agent(message, session_id, customer_industry)

        else:
            result = handle_chat(message or "")

        if message:
            db.add_conversation_message(session_id, "user", message, {"mode": resolved})
            db.add_conversation_message(session_id, "assistant", _reply_text(result), {"mode": resolved})
    except Exception as e:
        print(f"❌ [WEB] Chat error: {e}")
        return _error(str(e) or "Internal server error", 500)

    return jsonify({
        "success": True,
        "data": result,
        "mode": resolved,
        "sessionId": session_id,
        "metadata": {"autoIntent": resolved != mode},
    })


# ============ Background tasks ============

def _brainstorm_task(task_id: str, query: str, industry: str = None):
    tasks.update_task(task_id, progress=20, message="Collecting the latest trends...")
    result = workflows.run_brainstorm_flow(query, industry=industry)
    return result["data"]


@app.route("/api/chat/task", methods=["GET"])
def get_chat_task():
    task_id = request.args.get("taskId")
    if not task_id:
        return _error("Missing taskId", 400)

    task = tasks.get_task(task_id)
    if task is None:
        return _error("Task not found", 404)

    data = {
        "taskId": task["id"],
        "status": task["status"],
        "progress": task["progress"],
        "message": task["message"],
    }
    if task["status"] == tasks.COMPLETED:
        data["result"] = task["result"]
    elif task["status"] == tasks.FAILED:
        data["error"] = task["error"]
    return jsonify({"success": True, "data": data})


@app.route("/api/chat/task", methods=["POST"])
def create_chat_task():
    body = request.get_json(silent=True) or {}
    query = body.get("query")
    if not query:
        return _error("Missing query", 400)

    task_id = tasks.create_task()
    tasks.update_task(task_id, status=tasks.PROCESSING, progress=10, message="Analyzing your question...")
    tasks.run_in_background(task_id, _brainstorm_task, task_id, query, body.get("industry"))

    return jsonify({
        "success": True,
        "data": {
            "taskId": task_id,
            "status": tasks.PROCESSING,
            "message": "Task created, processing in the background",
        },
    })


# ============ ROI ============

@app.route("/api/roi", methods=["POST"])
def estimate_roi():
    body = request.get_json(silent=True) or {}
    industry = body.get("industry")
    use_case = body.get("useCase")
    company_size = body.get("companySize")

    if not industry or not use_case or not company_size:
        return _error("Missing required fields: industry, useCase, companySize", 400)

    try:
        data, is_default = roi.estimate_roi(industry, use_case, company_size)
    except Exception as e:
        print(f"❌ [WEB] ROI error: {e}")
        return jsonify({
            "success": True,
            "data": roi.default_roi(industry, use_case, company_size),
            "isDefault": True,
            "error": str(e),
        })

    return jsonify({"success": True, "data": data, "isDefault": is_default})


# ============ Cron ============

def collect_and_import(sources: list[str]) -> dict:
    items = collector.collect_all(sources)
    return data_persister.import_cases(items)


@app.route("/api/cron/data")
def cron_data():
    if request.args.get("secret") != config.CRON_SECRET:
        return _error("Unauthorized", 401)

    sources = [s.strip() for s in request.args.get("sources", "").split(",") if s.strip()]
    sources = sources or list(collector.COLLECTORS)

    task_id = tasks.create_task()
    tasks.run_in_background(task_id, collect_and_import, sources)
    print(f"🔄 [WEB] Cron collection started: {task_id} ({', '.join(sources)})")

    return jsonify({
        "success": True,
        "message": "Data update task triggered",
        "taskId": task_id,
        "sources": sources,
        "lastRun": datetime.now().isoformat(),
    })


def run():
    """Start the Flask server."""
    db.init_db()
    app.run(host="0.0.0.0", port=config.PORT)


def run_in_background():
    """Start the server on a daemon thread."""
    t = Thread(target=run, daemon=True)
    t.start()
    print(f"🌐 [WEB] Server started (port: {config.PORT})")


if __name__ == "__main__":
    print("Starting web server...")
    run()
