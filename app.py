# app.py — Flask JSON endpoint for programmatic submission
import logging

from flask import Flask, request, jsonify

from controller import SymptomQueryController

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = Flask(__name__)


@app.route("/", methods=["GET"])
def index():
    return "Healthcare Symptom Checker — POST /api/symptom-check with {'symptoms':'...'}"


@app.route("/api/symptom-check", methods=["POST"])
def symptom_check():
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict) or not isinstance(data.get("symptoms"), str):
        return jsonify({"error": "Please POST JSON with 'symptoms' field."}), 400

    # one controller per request: no state is shared between callers
    controller = SymptomQueryController()
    controller.change_input(data["symptoms"])
    state = controller.submit()
    return jsonify({"state": state.model_dump(), "view": controller.view().model_dump()})


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000)
