"""Security header scorer."""

import re

from analyzers.base import (
    BaseScorer,
    CategoryScore,
    CheckStatus,
    DetailedCheck,
    ScoringContext,
)
from signals.models import SignalSet, TransportSignals


class SecurityScorer(BaseScorer):
    """
    Scores the website security posture visible from one response.

    Checks:
    - HTTPS enforcement
    - Security headers (HSTS, CSP, X-Frame-Options, etc.)
    - Mixed content on HTTPS pages
    - Server information disclosure
    """

    # Security scoring weights (total = 100)
    WEIGHTS = {
        "https": 25,
        "hsts": 15,
        "csp": 15,
        "clickjacking": 10,
        "mime_sniffing": 10,
        "referrer_policy": 5,
        "permissions_policy": 5,
        "mixed_content": 10,
        "server_info": 5,
    }

    GRADES = ((85, "A"), (70, "B"), (55, "C"), (40, "D"))

    ONE_YEAR_SECONDS = 31536000

    @property
    def name(self) -> str:
        return "security"

    def score(self, signals: SignalSet, context: ScoringContext) -> CategoryScore:
        if signals.is_degenerate:
            result = CategoryScore.unavailable("Could not fetch page to check security headers")
            result.metadata.update(grade=security_grade(0), summary=_summary(0))
            return result

        transport = signals.transport
        issues: list[str] = []
        checks: dict[str, bool] = {}

        detailed_checks = [
            self._check_https(transport, checks, issues),
            self._check_hsts(transport, checks, issues),
            self._check_csp(transport, checks, issues),
            self._check_clickjacking(transport, checks, issues),
            self._check_mime_sniffing(transport, checks, issues),
            self._check_referrer_policy(transport, checks, issues),
            self._check_permissions_policy(transport, checks, issues),
            self._check_mixed_content(transport, checks, issues),
            self._check_server_info(transport, checks, issues),
        ]

        result = CategoryScore.from_checks(
            detailed_checks,
            checks=checks,
            issues=issues,
            recommendations=[c.recommendation for c in detailed_checks if c.recommendation],
        )
        result.metadata.update(
            grade=security_grade(result.score),
            summary=_summary(result.score),
            has_https=transport.is_secure,
        )
        return result

    def _check_https(self, transport: TransportSignals, checks: dict, issues: list) -> DetailedCheck:
        check = DetailedCheck(
            name="HTTPS / SSL Certificate",
            max_score=self.WEIGHTS["https"],
            why_it_matters=(
                "HTTPS encrypts data between visitors and your website. Without it, attackers can "
                "intercept passwords, form data, and personal information. Google also penalizes "
                "non-HTTPS sites in search rankings."
            ),
        )
        checks["https"] = transport.is_secure
        if transport.is_secure:
            check.award(check.max_score, "✓ Site uses HTTPS encryption")
            check.status = CheckStatus.GOOD
        else:
            check.note("✗ Site not using HTTPS - data is transmitted unencrypted")
            check.recommendation = (
                "Install an SSL certificate immediately. Most hosts offer free SSL via Let's "
                "Encrypt. This is critical for security and SEO."
            )
            issues.append("Not using HTTPS - customer data is at risk")
        return check

    def _check_hsts(self, transport: TransportSignals, checks: dict, issues: list) -> DetailedCheck:
        value = transport.header("strict-transport-security")
        check = DetailedCheck(
            name="HSTS (HTTP Strict Transport Security)",
            max_score=self.WEIGHTS["hsts"],
            why_it_matters=(
                "HSTS forces browsers to always use HTTPS, preventing downgrade attacks where "
                "attackers trick browsers into using insecure HTTP connections."
            ),
        )
        checks["hsts"] = value is not None
        if value is None:
            check.note("✗ No HSTS header found")
            check.recommendation = (
                "Add the header: Strict-Transport-Security: max-age=31536000; includeSubDomains. "
                "This can be configured in your web server or CDN settings."
            )
            issues.append("Missing HSTS header - browsers may connect via insecure HTTP")
            return check

        check.award(check.max_score, "✓ HSTS header present")
        check.status = CheckStatus.GOOD
        match = re.search(r"max-age=(\d+)", value, re.IGNORECASE)
        if match and int(match.group(1)) >= self.ONE_YEAR_SECONDS:
            check.note("✓ Max-age is 1 year or more (recommended)")
        elif match:
            check.note(f"⚠ max-age is {match.group(1)}s, recommend at least {self.ONE_YEAR_SECONDS}")
        if "includesubdomains" in value.lower():
            check.note("✓ Includes subdomains")
        return check

    def _check_csp(self, transport: TransportSignals, checks: dict, issues: list) -> DetailedCheck:
        value = transport.header("content-security-policy")
        check = DetailedCheck(
            name="Content Security Policy (CSP)",
            max_score=self.WEIGHTS["csp"],
            why_it_matters=(
                "CSP prevents XSS (cross-site scripting) attacks by controlling which scripts, "
                "styles, and resources can load on your site."
            ),
        )
        checks["csp"] = value is not None
        if value is None:
            check.note("✗ No Content Security Policy found")
            check.recommendation = (
                "Implement a CSP header. Start with: Content-Security-Policy: default-src 'self'; "
                "script-src 'self' trusted-cdn.com; This blocks unauthorized scripts from running."
            )
            issues.append("No Content Security Policy - site vulnerable to XSS attacks")
            return check

        check.note("✓ Content Security Policy header present")
        if "default-src" in value:
            check.note("✓ Has default-src directive")
        if "script-src" in value:
            check.note("✓ Has script-src directive")

        if "unsafe-inline" in value or "unsafe-eval" in value:
            check.award(10, "⚠ Uses unsafe-inline or unsafe-eval (reduces protection)")
            check.status = CheckStatus.PARTIAL
            check.recommendation = "Remove unsafe-inline and unsafe-eval; use nonces or hashes instead."
        else:
            check.award(check.max_score)
            check.status = CheckStatus.GOOD
        return check

    def _check_clickjacking(self, transport: TransportSignals, checks: dict, issues: list) -> DetailedCheck:
        frame_options = transport.header("x-frame-options")
        csp = transport.header("content-security-policy") or ""
        check = DetailedCheck(
            name="Clickjacking Protection",
            max_score=self.WEIGHTS["clickjacking"],
            why_it_matters=(
                "Clickjacking attacks trick users into clicking hidden buttons by embedding your "
                "site in an invisible iframe."
            ),
        )
        protected = frame_options is not None or "frame-ancestors" in csp
        checks["clickjacking"] = protected
        if protected:
            check.award(check.max_score)
            check.status = CheckStatus.GOOD
            if frame_options is not None:
                check.note(f"✓ X-Frame-Options: {frame_options}")
                if frame_options.upper() not in ("DENY", "SAMEORIGIN"):
                    check.note(f"⚠ X-Frame-Options has unusual value: {frame_options}")
            if "frame-ancestors" in csp:
                check.note("✓ CSP frame-ancestors directive set")
        else:
            check.note("✗ No clickjacking protection found")
            check.recommendation = (
                "Add the header: X-Frame-Options: DENY (or SAMEORIGIN if you embed your own "
                "content). This prevents your site from being embedded in malicious iframes."
            )
            issues.append("No clickjacking protection - site can be embedded in malicious iframes")
        return check

    def _check_mime_sniffing(self, transport: TransportSignals, checks: dict, issues: list) -> DetailedCheck:
        value = transport.header("x-content-type-options")
        check = DetailedCheck(
            name="MIME Type Sniffing Protection",
            max_score=self.WEIGHTS["mime_sniffing"],
            why_it_matters=(
                'MIME sniffing allows browsers to "guess" file types, which attackers exploit by '
                "uploading malicious files disguised as images."
            ),
        )
        checks["mimeSniffing"] = value is not None and value.strip().lower() == "nosniff"
        if checks["mimeSniffing"]:
            check.award(check.max_score, "✓ X-Content-Type-Options: nosniff")
            check.status = CheckStatus.GOOD
        elif value is not None:
            check.award(5, '⚠ X-Content-Type-Options present but not set to "nosniff"')
            check.status = CheckStatus.PARTIAL
            check.recommendation = "Set X-Content-Type-Options to nosniff."
        else:
            check.note("✗ No X-Content-Type-Options header")
            check.recommendation = (
                "Add the header: X-Content-Type-Options: nosniff. This is a simple, one-line "
                "security improvement."
            )
        return check

    def _check_referrer_policy(self, transport: TransportSignals, checks: dict, issues: list) -> DetailedCheck:
        value = transport.header("referrer-policy")
        check = DetailedCheck(
            name="Referrer Policy",
            max_score=self.WEIGHTS["referrer_policy"],
            why_it_matters=(
                "Controls what URL information is sent when users click links to other sites."
            ),
        )
        checks["referrerPolicy"] = value is not None
        if value is not None:
            check.award(check.max_score, f"✓ Referrer-Policy: {value}")
            check.status = CheckStatus.GOOD
        else:
            check.note("✗ No Referrer-Policy header")
            check.recommendation = (
                "Add: Referrer-Policy: strict-origin-when-cross-origin. This limits what URL "
                "info is shared with other sites."
            )
        return check

    def _check_permissions_policy(self, transport: TransportSignals, checks: dict, issues: list) -> DetailedCheck:
        present = (
            transport.header("permissions-policy") is not None
            or transport.header("feature-policy") is not None
        )
        check = DetailedCheck(
            name="Permissions Policy (Feature Policy)",
            max_score=self.WEIGHTS["permissions_policy"],
            why_it_matters=(
                "Controls which browser features (camera, microphone, geolocation) can be used."
            ),
        )
        checks["permissionsPolicy"] = present
        if present:
            check.award(check.max_score, "✓ Permissions Policy header present")
            check.status = CheckStatus.GOOD
        else:
            check.note("✗ No Permissions Policy header")
            check.recommendation = (
                "Add: Permissions-Policy: camera=(), microphone=(), geolocation=(). This blocks "
                "unwanted access to device features."
            )
        return check

    def _check_mixed_content(self, transport: TransportSignals, checks: dict, issues: list) -> DetailedCheck:
        check = DetailedCheck(
            name="Mixed Content",
            max_score=self.WEIGHTS["mixed_content"],
            why_it_matters=(
                "Mixed content occurs when HTTPS pages load resources over HTTP. Browsers may "
                "block that content and it opens holes attackers can exploit."
            ),
        )
        checks["mixedContent"] = False

        if not transport.is_secure:
            # Not applicable without HTTPS
            check.status = CheckStatus.PARTIAL
            check.note("⚠ Cannot check - site not using HTTPS")
            return check

        if transport.mixed_content_count == 0:
            check.award(check.max_score, "✓ No mixed content detected")
            check.status = CheckStatus.GOOD
            checks["mixedContent"] = True
        else:
            check.note(f"✗ Found {transport.mixed_content_count} HTTP resources on HTTPS page")
            check.recommendation = (
                "Update all resource URLs to use HTTPS. Check images, scripts, stylesheets, and fonts."
            )
            issues.append("Mixed content found - HTTP resources on HTTPS page")
        return check

    def _check_server_info(self, transport: TransportSignals, checks: dict, issues: list) -> DetailedCheck:
        server = transport.header("server")
        powered_by = transport.header("x-powered-by")
        check = DetailedCheck(
            name="Server Information Exposure",
            max_score=self.WEIGHTS["server_info"],
            why_it_matters=(
                "Exposing server software and versions helps attackers find known vulnerabilities."
            ),
        )
        checks["serverInfo"] = not server and not powered_by
        if checks["serverInfo"]:
            check.award(check.max_score, "✓ No server version information exposed")
            check.status = CheckStatus.GOOD
            return check

        check.award(2)
        check.status = CheckStatus.PARTIAL
        if server:
            check.note(f"⚠ Server header exposed: {server}")
        if powered_by:
            check.note(f"⚠ X-Powered-By header exposed: {powered_by}")
        check.recommendation = (
            "Remove or obscure Server and X-Powered-By headers in your web server config."
        )
        return check


def security_grade(score: int) -> str:
    """Letter grade for a security score."""
    for threshold, grade in SecurityScorer.GRADES:
        if score >= threshold:
            return grade
    return "F"


def _summary(score: int) -> str:
    if score >= 70:
        return "Good security posture with minor improvements possible."
    if score >= 50:
        return "Moderate security - several important headers missing."
    return "Security needs attention - multiple vulnerabilities detected."


def score_security(signals: SignalSet, context: ScoringContext) -> CategoryScore:
    """Score security for the given signals."""
    return SecurityScorer().score(signals, context)
