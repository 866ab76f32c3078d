import logging

import streamlit as st

from controller import SymptomQueryController

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

st.set_page_config(page_title="Symptom Checker", page_icon="🏥", layout="centered")

ss = st.session_state
if "controller" not in ss:
    ss.controller = SymptomQueryController()
controller = ss.controller


def _on_submit():
    # widgets inside a form take no callbacks; the submit button reads the input
    controller.change_input(ss.get("symptoms", ""))
    controller.request_submit()


st.title("🏥 Symptom Checker")
st.info("This tool is for educational purposes only. It does not provide medical advice.")

view = controller.view()

with st.form("symptom_form"):
    st.text_input(
        "Enter Symptoms:",
        key="symptoms",
        placeholder="e.g., headache, fever, sore throat, cough",
        disabled=view.input_disabled,
    )

    if view.show_error:
        st.error(f"Error: {view.error_banner}")

    st.form_submit_button(
        view.button_label,
        on_click=_on_submit,
        disabled=view.button_disabled,
    )

if view.show_loading:
    with st.spinner(view.loading_text):
        controller.resolve()
    st.rerun()

if view.show_result:
    st.subheader("🤖 MEDICO Response")
    st.text(view.result_text)
