"""Built-in Jinja2 sources for transactional emails.

Each template has an ``.html`` and a ``.txt`` variant. HTML variants are
rendered with autoescaping, text variants are not.
"""

LOGO_URL = "https://miraarastudiosofficial.web.app/uploads/logo/logo.png"
SITE_URL = "https://miraara.in"

CONTACT_ADMIN_HTML = """
<div style="background:linear-gradient(180deg,#fff5fa,#ffe0ef); padding:30px; font-family:Poppins,sans-serif; color:#333;">
  <div style="max-width:700px;margin:auto;background:#fff;border-radius:20px;overflow:hidden;box-shadow:0 8px 30px rgba(0,0,0,0.08);">
    <div style="background:linear-gradient(90deg,#ff79b0,#d63384);padding:30px;color:#fff;text-align:center;">
      <img src="{{ logo_url }}" alt="Miraara" style="width:90px;margin:0 auto 10px;display:block"/>
      <h1 style="margin:0;font-size:20px;">New Contact Submission</h1>
      <p style="margin:6px 0 0;opacity:0.95;">Miraara • Art &amp; Design</p>
    </div>
    <div style="padding:28px;font-size:15px;line-height:1.6;color:#333;">
      <p>Hello Miraara Team,</p>
      <p>Details from the contact form:</p>
      <table role="presentation" style="width:100%;border-collapse:collapse;margin-bottom:18px;">
        <tr><td style="padding:8px;font-weight:600;width:120px;">Name</td><td style="padding:8px;">{{ name }}</td></tr>
        <tr><td style="padding:8px;font-weight:600;">Email</td><td style="padding:8px;">{{ email }}</td></tr>
        <tr><td style="padding:8px;font-weight:600;">Phone</td><td style="padding:8px;">{{ phone or "—" }}</td></tr>
        <tr><td style="padding:8px;font-weight:600;">Subject</td><td style="padding:8px;">{{ subject }}</td></tr>
      </table>
      <div style="background:#fff6fb;border-left:4px solid #ff99c8;padding:16px;border-radius:8px;">
        <p>{{ message }}</p>
      </div>
      <p style="margin-top:22px;font-size:13px;color:#777;">Saved at: {{ saved_at }}</p>
    </div>
    <div style="background:#faf5f8;padding:18px;text-align:center;font-size:13px;color:#777;">© {{ year }} Miraara</div>
  </div>
</div>
"""

CONTACT_ADMIN_TEXT = """New contact from {{ name }}
Email: {{ email }}
Phone: {{ phone or "-" }}
Subject: {{ subject }}
Message: {{ message }}"""

CONTACT_AUTO_REPLY_HTML = """
<div style="background:#fff8fb;padding:30px;font-family:Poppins,sans-serif;color:#333;text-align:center;">
  <img src="{{ logo_url }}" alt="Miraara" style="width:80px;margin-bottom:12px;"/>
  <h2 style="color:#d63384;">Thanks for reaching out, {{ name }} 💫</h2>
  <p>We've received your message and will reply within 1–2 business days.</p>
  <a href="{{ site_url }}" style="background:linear-gradient(90deg,#ff77a9,#d63384);color:#fff;padding:10px 30px;border-radius:28px;text-decoration:none;font-weight:600;">Explore Miraara</a>
</div>
"""

CONTACT_AUTO_REPLY_TEXT = "Thanks for reaching out, {{ name }}! We'll reply within 1-2 business days."

SUBSCRIBE_ADMIN_HTML = """
<div style="background:#fff9f6;padding:30px;font-family:Poppins,sans-serif;">
  <div style="max-width:600px;margin:auto;background:#fff;border-radius:16px;padding:20px;box-shadow:0 6px 18px rgba(0,0,0,0.06);text-align:center;">
    <img src="{{ logo_url }}" alt="Miraara" style="width:60px;margin-bottom:12px;"/>
    <h3 style="color:#d63384;">New Subscriber</h3>
    <p>Email: {{ email }}</p>
    <p style="font-size:13px;color:#666;">Saved at: {{ saved_at }}</p>
  </div>
</div>
"""

SUBSCRIBE_ADMIN_TEXT = "New subscriber: {{ email }}"

SUBSCRIBE_AUTO_REPLY_HTML = """
<div style="background:#fff8fb;padding:30px;font-family:Poppins,sans-serif;text-align:center;">
  <img src="{{ logo_url }}" alt="Miraara" style="width:70px;margin-bottom:10px;"/>
  <h2 style="color:#d63384;">Welcome to Miraara ✨</h2>
  <p>You're on the list. Expect beautiful updates, exclusive previews and offers.</p>
  <a href="{{ site_url }}" style="background:linear-gradient(90deg,#ff77a9,#d63384);color:#fff;padding:10px 28px;border-radius:28px;text-decoration:none;font-weight:600;">Visit Miraara</a>
  <p style="font-size:13px;color:#888;margin-top:14px;">You can unsubscribe anytime.</p>
</div>
"""

SUBSCRIBE_AUTO_REPLY_TEXT = "Welcome to Miraara! You're on our subscriber list for updates and offers."

BUILTIN_TEMPLATES: dict[str, str] = {
    "contact_admin.html": CONTACT_ADMIN_HTML,
    "contact_admin.txt": CONTACT_ADMIN_TEXT,
    "contact_auto_reply.html": CONTACT_AUTO_REPLY_HTML,
    "contact_auto_reply.txt": CONTACT_AUTO_REPLY_TEXT,
    "subscribe_admin.html": SUBSCRIBE_ADMIN_HTML,
    "subscribe_admin.txt": SUBSCRIBE_ADMIN_TEXT,
    "subscribe_auto_reply.html": SUBSCRIBE_AUTO_REPLY_HTML,
    "subscribe_auto_reply.txt": SUBSCRIBE_AUTO_REPLY_TEXT,
}
