"""Single-page chat UI served by the API."""
from jinja2 import Environment, select_autoescape

from .config import APP_NAME, APP_TAGLINE, WELCOME_MESSAGE
from .models import ChatMessage

PAGE = """
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>{{ app_name }}</title>
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <style>
    body { margin: 0; font-family: system-ui, sans-serif; background: #f9fafb; display: flex; flex-direction: column; height: 100vh; }
    header { background: #3b82f6; color: #fff; padding: 16px 24px; }
    header h1 { margin: 0; font-size: 1.25rem; }
    header p { margin: 4px 0 0; font-size: .875rem; opacity: .8; }
    #transcript { flex: 1; overflow-y: auto; padding: 16px; }
    .wrap { max-width: 48rem; margin: 0 auto; }
    .msg { display: flex; margin-bottom: 12px; }
    .msg.user { justify-content: flex-end; }
    .bubble { max-width: 80%; padding: 10px 14px; border-radius: 12px; white-space: pre-wrap; }
    .user .bubble { background: #3b82f6; color: #fff; }
    .bot .bubble { background: #fff; border: 1px solid #e5e7eb; }
    .time { display: block; font-size: .7rem; opacity: .6; margin-top: 4px; }
    #typing { display: none; font-size: .875rem; color: #6b7280; margin-left: 8px; }
    #upload { display: none; background: #fff; border: 1px solid #ddd6fe; border-radius: 8px; padding: 16px; margin-bottom: 12px; }
    footer { border-top: 1px solid #e5e7eb; background: #fff; padding: 12px; }
    form { display: flex; gap: 8px; }
    textarea { flex: 1; min-height: 44px; }
    .error { color: #b91c1c; font-size: .875rem; }
  </style>
</head>
<body>
  <header>
    <h1>{{ app_name }}</h1>
    <p>{{ tagline }}</p>
  </header>

  <div id="transcript"><div class="wrap" id="messages"></div>
    <div class="wrap"><span id="typing">{{ app_name }} is typing...</span></div>
  </div>

  <footer>
    <div class="wrap">
      <div id="upload">
        <div id="stage-upload">
          <strong>Snap Your Doubt</strong>
          <p>I'll read your question from the image</p>
          <input type="file" id="image-file" accept="image/*" />
          <button type="button" id="upload-close">Cancel</button>
        </div>
        <div id="stage-processing" style="display:none">Reading your image...</div>
        <div id="stage-confirm" style="display:none">
          <p>Here's what I read from your image:</p>
          <textarea id="extracted"></textarea>
          <button type="button" id="retake">Retake</button>
          <button type="button" id="confirm">Confirm</button>
        </div>
        <p class="error" id="upload-error"></p>
      </div>
      <form id="chat-form">
        <button type="button" id="open-upload" title="Ask from an image">&#128247;</button>
        <textarea id="question" placeholder="Ask a question..."></textarea>
        <button type="submit" id="send">Send</button>
      </form>
    </div>
  </footer>

  <script>
    const messages = {{ messages | tojson }};

    function newId() {
      return (window.crypto && crypto.randomUUID) ? crypto.randomUUID() : String(Date.now() + Math.random());
    }

    function render() {
      const box = document.getElementById("messages");
      box.innerHTML = "";
      for (const m of messages) {
        const row = document.createElement("div");
        row.className = "msg " + m.sender;
        const bubble = document.createElement("div");
        bubble.className = "bubble";
        bubble.textContent = m.content;
        const time = document.createElement("span");
        time.className = "time";
        time.textContent = new Date(m.timestamp).toLocaleTimeString();
        bubble.appendChild(time);
        row.appendChild(bubble);
        box.appendChild(row);
      }
      const transcript = document.getElementById("transcript");
      transcript.scrollTop = transcript.scrollHeight;
    }

    function addMessage(content, sender) {
      messages.push({id: newId(), content: content, sender: sender, timestamp: new Date().toISOString()});
      render();
    }

    function setBusy(busy) {
      document.getElementById("typing").style.display = busy ? "inline" : "none";
      document.getElementById("send").disabled = busy;
    }

    async function postJson(path, body) {
      const resp = await fetch(path, {
        method: "POST",
        headers: {"Content-Type": "application/json"},
        body: JSON.stringify(body)
      });
      const data = await resp.json();
      if (!resp.ok) {
        throw new Error(data.detail || data.error || resp.statusText);
      }
      return data;
    }

    async function sendMessage(content) {
      content = content.trim();
      if (!content) return;
      addMessage(content, "user");
      setBusy(true);
      try {
        const data = await postJson("/chat", {content: content});
        addMessage(data.answer, "bot");
      } catch (err) {
        console.error(err);
        alert("Failed to get an answer. Please try again.");
      } finally {
        setBusy(false);
      }
    }

    function showStage(stage) {
      for (const s of ["upload", "processing", "confirm"]) {
        document.getElementById("stage-" + s).style.display = (s === stage) ? "block" : "none";
      }
      document.getElementById("upload-error").textContent = "";
    }

    function readBase64(file) {
      return new Promise((resolve, reject) => {
        const reader = new FileReader();
        reader.onload = () => resolve(String(reader.result).split(",", 2)[1] || "");
        reader.onerror = () => reject(reader.error);
        reader.readAsDataURL(file);
      });
    }

    document.getElementById("chat-form").addEventListener("submit", (e) => {
      e.preventDefault();
      const input = document.getElementById("question");
      const content = input.value;
      input.value = "";
      sendMessage(content);
    });

    document.getElementById("question").addEventListener("keydown", (e) => {
      if (e.key === "Enter" && !e.shiftKey) {
        e.preventDefault();
        document.getElementById("chat-form").requestSubmit();
      }
    });

    document.getElementById("open-upload").addEventListener("click", () => {
      document.getElementById("upload").style.display = "block";
      showStage("upload");
    });

    document.getElementById("upload-close").addEventListener("click", () => {
      document.getElementById("upload").style.display = "none";
    });

    document.getElementById("retake").addEventListener("click", () => {
      document.getElementById("image-file").value = "";
      showStage("upload");
    });

    document.getElementById("image-file").addEventListener("change", async (e) => {
      const file = e.target.files[0];
      if (!file) return;
      showStage("processing");
      try {
        const image = await readBase64(file);
        const data = await postJson("/vision", {image: image, mime_type: file.type || "image/jpeg"});
        document.getElementById("extracted").value = data.text;
        showStage("confirm");
      } catch (err) {
        showStage("upload");
        document.getElementById("upload-error").textContent = "Could not read the image: " + err.message;
      }
    });

    document.getElementById("confirm").addEventListener("click", () => {
      const text = document.getElementById("extracted").value;
      document.getElementById("upload").style.display = "none";
      sendMessage(text);
    });

    render();
  </script>
</body>
</html>
"""

_env = Environment(autoescape=select_autoescape(default_for_string=True))
_template = _env.from_string(PAGE)


def render_chat_page(
    app_name: str = APP_NAME,
    tagline: str = APP_TAGLINE,
    welcome: str = WELCOME_MESSAGE,
) -> str:
    """Render the chat page HTML, seeded with the welcome bubble."""
    messages = [ChatMessage(content=welcome, sender="bot").model_dump(mode="json")]
    return _template.render(app_name=app_name, tagline=tagline, messages=messages)
