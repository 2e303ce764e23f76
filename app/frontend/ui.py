"""
Streamlit entry point for the SkillChain client.

Run with: streamlit run app/frontend/ui.py

The ViewController lives in ``st.session_state``; every page renderer gets it
and a ``UIConfig`` as arguments.
"""

from dataclasses import dataclass

import streamlit as st
from dotenv import load_dotenv

from app.config import settings
from app.core.logging import setup_logging
from app.frontend.api_client import ApiError, ApiUnavailableError, SkillChainClient
from app.frontend.dashboard import (
    can_issue_certificates,
    ipfs_download_url,
    load_admin_stats,
    load_certificates,
    new_certificate_id,
    role_distribution,
    verification_checklist,
)
from app.frontend.mock_data import OFFLINE_BANNER
from app.frontend.session import SessionStore
from app.frontend.views import View, ViewController
from app.utils.validators import (
    password_strength,
    validate_otp_code,
    validate_phone,
    validate_reset_password,
    validate_signup_password,
)

load_dotenv()

ROLES = ["STUDENT", "INSTITUTE", "COMPANY"]


@dataclass
class UIConfig:
    """Display preferences passed to every renderer."""

    dark_mode: bool = False
    page_title: str = "SkillChain Credentials"

    @property
    def accent(self) -> str:
        return "#818cf8" if self.dark_mode else "#4f46e5"


def _client(controller: ViewController) -> SkillChainClient:
    token = controller.session.token if controller.session else None
    return SkillChainClient(token=token)


def _show_api_error(e: Exception) -> None:
    if isinstance(e, ApiUnavailableError):
        st.error("Cannot reach the server. Please try again shortly.")
    else:
        st.error(getattr(e, "message", str(e)))


def render_landing(controller: ViewController, config: UIConfig):
    st.title("Verifiable credentials for every learner")
    st.write("Institutes issue tamper-evident certificates; students and employers verify them in seconds.")
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Log In"):
            controller.navigate(View.LOGIN)
            st.rerun()
    with col2:
        if st.button("Sign Up"):
            controller.navigate(View.SIGNUP)
            st.rerun()

    st.markdown("---")
    certificate_id = st.text_input("Verify a certificate by ID", placeholder="crt-...")
    if st.button("Verify") and certificate_id:
        render_verification(certificate_id.strip())


def render_verification(certificate_id: str):
    with SkillChainClient() as client:
        try:
            cert = client.get_certificate(certificate_id)
        except (ApiError, ApiUnavailableError) as e:
            _show_api_error(e)
            return
    st.success(f"{cert['courseName']} issued to {cert['studentName']} by {cert['issuerName']}")
    for item in verification_checklist(cert):
        st.write(f"✓ {item}")


def render_login(controller: ViewController, config: UIConfig):
    st.header("Log in")
    with st.form("login_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        remember = st.checkbox("Remember me")
        submitted = st.form_submit_button("Log In")

    if st.button("Forgot password?"):
        controller.navigate(View.FORGOT_PASSWORD)
        st.rerun()
    if st.button("Create an account"):
        controller.navigate(View.SIGNUP)
        st.rerun()

    if submitted:
        with _client(controller) as client:
            try:
                payload = client.login(email.strip(), password)
            except ApiError as e:
                if e.status_code == 403 and e.payload.get("userId"):
                    controller.verification_required(e.payload["userId"], email.strip())
                    st.rerun()
                _show_api_error(e)
                return
            except ApiUnavailableError as e:
                _show_api_error(e)
                return
        controller.login_succeeded(payload, remember=remember)
        st.rerun()


def render_signup(controller: ViewController, config: UIConfig):
    st.header("Create your account")
    role = st.selectbox("I am a", ROLES)
    with st.form("signup_form"):
        name = st.text_input("Full Name / Organization Name")
        email = st.text_input("Email Address")
        password = st.text_input("Password", type="password")
        phone = st.text_input("Phone Number")
        extra = {}
        if role == "STUDENT":
            extra["apparId"] = st.text_input("APPAR ID (Optional)", placeholder="e.g. APPAR-2023-XYZ")
        elif role == "INSTITUTE":
            extra["recognitionNumber"] = st.text_input("Recognition Number")
            extra["address"] = st.text_input("Address")
        elif role == "COMPANY":
            extra["website"] = st.text_input("Website", placeholder="https://...")
        submitted = st.form_submit_button("Create account")

    if password:
        score, label = password_strength(password)
        st.progress(score / 5, text=f"Password strength: {label}")

    if st.button("Back to login"):
        controller.navigate(View.LOGIN)
        st.rerun()

    if submitted:
        errors = validate_signup_password(password)
        if phone and not validate_phone(phone):
            errors.append("Enter a valid phone number")
        if errors:
            for error in errors:
                st.error(error)
            return
        with _client(controller) as client:
            try:
                result = client.register(
                    role=role, name=name, email=email.strip(), password=password, phone=phone, **extra
                )
            except (ApiError, ApiUnavailableError) as e:
                _show_api_error(e)
                return
        controller.verification_required(result["userId"], result["email"])
        st.rerun()


def render_verify_otp(controller: ViewController, config: UIConfig):
    pending = controller.pending_verification
    st.header("Verify your email")
    st.write(f"We sent a 6-digit code to **{pending['email']}**.")
    code = st.text_input("Verification code", max_chars=6)

    col1, col2 = st.columns(2)
    with col1:
        verify_clicked = st.button("Verify")
    with col2:
        resend_clicked = st.button("Resend code")

    with _client(controller) as client:
        if verify_clicked:
            if not validate_otp_code(code.strip()):
                st.error("Enter the 6-digit code")
                return
            try:
                payload = client.verify_otp(pending["userId"], code.strip())
            except (ApiError, ApiUnavailableError) as e:
                _show_api_error(e)
                return
            controller.login_succeeded(payload)
            st.rerun()

        if resend_clicked:
            try:
                st.info(client.resend_otp(pending["userId"])["message"])
            except (ApiError, ApiUnavailableError) as e:
                _show_api_error(e)


def render_forgot_password(controller: ViewController, config: UIConfig):
    st.header("Reset your password")
    email = st.text_input("Email")
    if st.button("Send reset code") and email:
        with _client(controller) as client:
            try:
                st.info(client.forgot_password(email.strip())["message"])
            except (ApiError, ApiUnavailableError) as e:
                _show_api_error(e)
                return
        controller.reset_requested(email.strip())
        st.rerun()
    if st.button("Back to login"):
        controller.navigate(View.LOGIN)
        st.rerun()


def render_reset_password(controller: ViewController, config: UIConfig):
    st.header("Choose a new password")
    st.caption(f"Code sent to {controller.reset_email}")
    with st.form("reset_form"):
        code = st.text_input("Reset code", max_chars=6)
        new_password = st.text_input("New password", type="password")
        confirm_password = st.text_input("Confirm password", type="password")
        submitted = st.form_submit_button("Update password")

    if submitted:
        problem = validate_reset_password(new_password, confirm_password)
        if problem:
            st.error(problem)
            return
        with _client(controller) as client:
            try:
                client.reset_password(controller.reset_email, code.strip(), new_password)
            except (ApiError, ApiUnavailableError) as e:
                _show_api_error(e)
                return
        st.success("Password updated successfully")
        controller.reset_completed()
        st.rerun()


def render_add_certificate(controller: ViewController, config: UIConfig):
    st.header("Issue a new certificate")
    with st.form("certificate_form"):
        student_name = st.text_input("Student Name")
        student_appar_id = st.text_input("Student APPAR ID")
        course_name = st.text_input("Course Name")
        grade = st.text_input("Grade")
        issuer_name = st.text_input("Issuer Name", value=controller.session.name)
        issue_date = st.date_input("Issue Date")
        ipfs_cid = st.text_input("IPFS CID")
        blockchain_tx = st.text_input("Blockchain Transaction")
        submitted = st.form_submit_button("Issue certificate")

    if st.button("Cancel"):
        controller.navigate(View.DASHBOARD)
        st.rerun()

    if submitted:
        certificate = {
            "certificateId": new_certificate_id(),
            "studentName": student_name,
            "studentApparId": student_appar_id,
            "courseName": course_name,
            "grade": grade,
            "issuerName": issuer_name,
            "issueDate": issue_date.isoformat(),
            "ipfsCid": ipfs_cid,
            "blockchainTx": blockchain_tx,
            "isValid": True,
        }
        with _client(controller) as client:
            try:
                created = client.create_certificate(certificate)
            except (ApiError, ApiUnavailableError) as e:
                _show_api_error(e)
                return
        st.success(f"Certificate {created['certificateId']} issued")
        controller.navigate(View.DASHBOARD)
        st.rerun()


def render_certificate(cert: dict):
    with st.container(border=True):
        st.subheader(cert["courseName"])
        st.write(f"{cert['studentName']} · {cert['studentApparId']}")
        st.caption(f"{cert['issuerName']} · {cert['issueDate']} · Grade {cert['grade']}")
        st.code(cert["blockchainTx"], language=None)
        url = ipfs_download_url(cert)
        if url:
            st.link_button("Download PDF", url)
        with st.expander("Verify"):
            for item in verification_checklist(cert):
                st.write(f"✓ {item}")
            st.caption(f"Verification ID: {cert['certificateId']}")


def render_admin_dashboard(controller: ViewController, config: UIConfig):
    with _client(controller) as client:
        data = load_admin_stats(client)
    st.title("Admin Dashboard")
    if data.offline:
        st.warning("Failed to load statistics. Check backend connection.")
        return
    stats = data.stats
    cols = st.columns(4)
    cols[0].metric("Total Users", stats["totalUsers"])
    cols[1].metric("Certificates Issued", stats["totalCertificates"])
    cols[2].metric("Active Institutes", stats["roles"]["institutes"])
    cols[3].metric("Partner Companies", stats["roles"]["companies"])

    st.subheader("User Distribution")
    st.bar_chart(role_distribution(stats), x="name", y="value", color=config.accent)

    st.subheader("Weekly Activity")
    if stats.get("recentActivityIsSample"):
        st.caption("Sample data")
    st.bar_chart(stats["recentActivity"], x="name", y=["newUsers", "issuedCerts"])


def render_dashboard(controller: ViewController, config: UIConfig):
    session = controller.session
    if session.role == "ADMIN":
        render_admin_dashboard(controller, config)

    appar_id = session.user.get("apparId") if session.role == "STUDENT" else None
    with _client(controller) as client:
        data = load_certificates(client, appar_id=appar_id, seed=True)

    st.title(f"Welcome back, {session.name}")
    if appar_id:
        st.caption(f"APPAR ID: {appar_id}")
    if data.offline:
        st.warning(OFFLINE_BANNER)

    if can_issue_certificates(session.role):
        if st.button("Issue new certificate"):
            controller.navigate(View.ADD_CERTIFICATE)
            st.rerun()

    st.header("Credentials")
    if not data.certificates:
        st.info("No certificates found.")
    for cert in data.certificates:
        render_certificate(cert)


RENDERERS = {
    View.LANDING: render_landing,
    View.LOGIN: render_login,
    View.SIGNUP: render_signup,
    View.VERIFY_OTP: render_verify_otp,
    View.FORGOT_PASSWORD: render_forgot_password,
    View.RESET_PASSWORD: render_reset_password,
    View.ADD_CERTIFICATE: render_add_certificate,
    View.DASHBOARD: render_dashboard,
}


def main():
    setup_logging()
    if "ui_config" not in st.session_state:
        st.session_state["ui_config"] = UIConfig()
    config = st.session_state["ui_config"]
    st.set_page_config(page_title=config.page_title, layout="wide")

    if "controller" not in st.session_state:
        controller = ViewController(SessionStore(settings.SESSION_FILE))
        controller.restore()
        st.session_state["controller"] = controller
    controller = st.session_state["controller"]

    st.sidebar.title("SkillChain")
    config.dark_mode = st.sidebar.toggle("Dark mode", value=config.dark_mode)
    if controller.is_authenticated:
        st.sidebar.caption(f"{controller.session.name} · {controller.session.role}")
        if st.sidebar.button("Dashboard"):
            controller.navigate(View.DASHBOARD)
            st.rerun()
        if st.sidebar.button("Log Out"):
            controller.logout()
            st.rerun()
    elif st.sidebar.button("Home"):
        controller.navigate(View.LANDING)
        st.rerun()

    # Re-apply the guards in case the session changed since the last run
    view = controller.navigate(controller.view)
    RENDERERS[view](controller, config)


if __name__ == "__main__":
    main()
